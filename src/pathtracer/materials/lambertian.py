"""Lambertian (ideal diffuse) material.

Scatter directions are sampled as the surface normal plus a random unit
vector, which distributes them with density proportional to cos(theta)
around the normal. With that importance sampling the BRDF and the pdf cancel:

    attenuation = (albedo / pi) * cos(theta) / (cos(theta) / pi) = albedo

Example:
    >>> import random
    >>> from pathtracer.core.vec3 import Color
    >>> from pathtracer.materials.lambertian import Lambertian
    >>> red = Lambertian(Color(0.65, 0.05, 0.05))
    >>> result = red.scatter(ray, hit, random.Random(3))
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from pathtracer.core.ray import Ray, random_unit_vector
from pathtracer.core.vec3 import Color
from pathtracer.materials.base import Material, ScatterResult
from pathtracer.textures.base import Texture
from pathtracer.textures.solid_color import as_texture

if TYPE_CHECKING:
    from pathtracer.geometry.hittable import HitRecord


class Lambertian(Material):
    """Ideal diffuse reflector.

    Attributes:
        albedo: Texture giving the diffuse reflectance at each surface point.
            Plain colors are wrapped in a SolidColor.
    """

    def __init__(self, albedo: Texture | Color) -> None:
        self.albedo = as_texture(albedo)

    def scatter(
        self,
        ray_in: Ray,
        hit: HitRecord,
        rng: random.Random,
    ) -> ScatterResult | None:
        """Scatter into the hemisphere around the normal.

        Lambertian surfaces never absorb; the returned result is always
        present.

        Args:
            ray_in: The incoming ray.
            hit: The intersection being shaded.
            rng: Random generator owned by the calling worker.

        Returns:
            The albedo at the hit point and the scattered ray.
        """
        direction = hit.normal + random_unit_vector(rng)

        # The random vector can cancel the normal almost exactly
        if direction.near_zero():
            direction = hit.normal

        scattered = Ray(hit.point, direction, ray_in.time)
        attenuation = self.albedo.value(hit.u, hit.v, hit.point)
        return ScatterResult(attenuation, scattered)

    def __repr__(self) -> str:
        return f"Lambertian({self.albedo!r})"
