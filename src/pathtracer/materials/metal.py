"""Metal (specular reflective) material.

The incoming direction is mirrored about the normal, then perturbed by a
random point in a sphere of radius ``roughness``:

    reflected = reflect(unit(d), n) + roughness * random_in_unit_sphere()

Roughness 0 gives a perfect mirror; larger values blur the reflection. A
perturbed direction that ends up below the surface is absorbed.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from pathtracer.core.ray import Ray, random_in_unit_sphere, reflect
from pathtracer.core.vec3 import Color
from pathtracer.materials.base import Material, ScatterResult

if TYPE_CHECKING:
    from pathtracer.geometry.hittable import HitRecord


class Metal(Material):
    """Reflective metal with optional fuzz.

    Attributes:
        albedo: Reflectance color of the metal.
        roughness: Fuzz radius, clamped to [0, 1].
    """

    def __init__(self, albedo: Color, roughness: float = 0.0) -> None:
        self.albedo = albedo
        self.roughness = min(max(roughness, 0.0), 1.0)

    def scatter(
        self,
        ray_in: Ray,
        hit: HitRecord,
        rng: random.Random,
    ) -> ScatterResult | None:
        """Reflect the incoming ray.

        Args:
            ray_in: The incoming ray.
            hit: The intersection being shaded.
            rng: Random generator owned by the calling worker.

        Returns:
            The reflected ray and the albedo, or None if the perturbed
            reflection points into the surface.
        """
        reflected = reflect(ray_in.direction.unit(), hit.normal)
        if self.roughness > 0.0:
            reflected = reflected + self.roughness * random_in_unit_sphere(rng)

        if reflected.dot(hit.normal) <= 0.0:
            return None
        return ScatterResult(self.albedo, Ray(hit.point, reflected, ray_in.time))

    def __repr__(self) -> str:
        return f"Metal({self.albedo!r}, roughness={self.roughness})"
