"""Dielectric (glass/water) material.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when ratio * sin(theta) > 1

The material chooses between reflection and refraction stochastically, with
the probability of reflecting equal to the Schlick reflectance. Glass absorbs
nothing, so the attenuation is always white.

Example:
    >>> from pathtracer.materials.dielectric import Dielectric
    >>> glass = Dielectric(1.5)
    >>> water = Dielectric(1.33)
"""

from __future__ import annotations

import math
import random
from typing import TYPE_CHECKING

from pathtracer.core.ray import Ray, reflect, refract, schlick_reflectance
from pathtracer.core.vec3 import Color
from pathtracer.materials.base import Material, ScatterResult

if TYPE_CHECKING:
    from pathtracer.geometry.hittable import HitRecord

WHITE = Color(1.0, 1.0, 1.0)


class Dielectric(Material):
    """Transparent material that reflects and refracts.

    Attributes:
        refraction_index: Index of refraction relative to the surrounding
            medium. Common values: air 1.0, water 1.33, glass 1.5,
            diamond 2.4.
    """

    def __init__(self, refraction_index: float) -> None:
        if refraction_index <= 0.0:
            raise ValueError(f"refraction_index must be positive, got {refraction_index}")
        self.refraction_index = refraction_index

    def scatter(
        self,
        ray_in: Ray,
        hit: HitRecord,
        rng: random.Random,
    ) -> ScatterResult | None:
        """Reflect or refract the incoming ray.

        Args:
            ray_in: The incoming ray.
            hit: The intersection being shaded. ``front_face`` decides whether
                the ray is entering or leaving the material.
            rng: Random generator owned by the calling worker.

        Returns:
            White attenuation and the reflected or refracted ray. Never None.
        """
        ratio = 1.0 / self.refraction_index if hit.front_face else self.refraction_index

        unit_direction = ray_in.direction.unit()
        cos_theta = min(-unit_direction.dot(hit.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = ratio * sin_theta > 1.0
        if cannot_refract or schlick_reflectance(cos_theta, ratio) > rng.random():
            direction = reflect(unit_direction, hit.normal)
        else:
            direction = refract(unit_direction, hit.normal, ratio)

        return ScatterResult(WHITE, Ray(hit.point, direction, ray_in.time))

    def __repr__(self) -> str:
        return f"Dielectric({self.refraction_index})"
