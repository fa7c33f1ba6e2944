"""Material interface shared by every surface model.

A material answers two questions at a hit point:

    scatter(ray_in, hit, rng) -> ScatterResult | None
        Either absorb the ray (None) or produce a scattered ray together with
        the color attenuation to apply to the light arriving along it.
    emitted(u, v, point) -> Color
        Radiance the surface emits on its own. Black for everything except
        light sources.

Scattered rays always carry the time stamp of the incoming ray, so motion
blur stays consistent along a whole path.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, NamedTuple

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Color, Vec3

if TYPE_CHECKING:
    from pathtracer.geometry.hittable import HitRecord

BLACK = Color(0.0, 0.0, 0.0)


class ScatterResult(NamedTuple):
    """Outcome of a successful scatter event.

    Attributes:
        attenuation: Per-channel factor applied to the radiance carried back
            along the scattered ray.
        ray: The scattered ray, originating at the hit point.
    """

    attenuation: Color
    ray: Ray


class Material(ABC):
    """Base class for surface materials."""

    @abstractmethod
    def scatter(
        self,
        ray_in: Ray,
        hit: HitRecord,
        rng: random.Random,
    ) -> ScatterResult | None:
        """Sample a scattered ray, or return None if the ray is absorbed."""

    def emitted(self, u: float, v: float, point: Vec3) -> Color:
        """Return the emitted radiance at a surface point (black by default)."""
        return BLACK
