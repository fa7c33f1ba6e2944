"""Diffuse area light.

An emissive surface that radiates its texture color uniformly and never
scatters incoming light. Emission values may exceed 1.0 to make lights
brighter than the surfaces they illuminate.

Example:
    >>> from pathtracer.core.vec3 import Color
    >>> from pathtracer.materials.diffuse_light import DiffuseLight
    >>> lamp = DiffuseLight(Color(15.0, 15.0, 15.0))
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Color, Vec3
from pathtracer.materials.base import Material, ScatterResult
from pathtracer.textures.base import Texture
from pathtracer.textures.solid_color import as_texture

if TYPE_CHECKING:
    from pathtracer.geometry.hittable import HitRecord


class DiffuseLight(Material):
    """Light-emitting material.

    Attributes:
        emit: Texture giving the emitted radiance.
    """

    def __init__(self, emit: Texture | Color) -> None:
        self.emit = as_texture(emit)

    def scatter(
        self,
        ray_in: Ray,
        hit: HitRecord,
        rng: random.Random,
    ) -> ScatterResult | None:
        return None

    def emitted(self, u: float, v: float, point: Vec3) -> Color:
        return self.emit.value(u, v, point)

    def __repr__(self) -> str:
        return f"DiffuseLight({self.emit!r})"
