"""Axis-aligned box built from six rectangles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Vec3
from pathtracer.geometry.aabb import AABB
from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.geometry.hittable_list import HittableList
from pathtracer.geometry.rect import PlaneX, PlaneY, PlaneZ

if TYPE_CHECKING:
    from pathtracer.materials.base import Material


class Box(Hittable):
    """A closed box between two opposite corners, all faces sharing a material.

    Combine with Translate and YawRotation to place rotated boxes, as in the
    Cornell box scene.

    Attributes:
        minimum: The corner with the smallest coordinates.
        maximum: The corner with the largest coordinates.
        material: The shared material of all six faces.
    """

    def __init__(self, p0: Vec3, p1: Vec3, material: Material) -> None:
        self.minimum = Vec3(min(p0.x, p1.x), min(p0.y, p1.y), min(p0.z, p1.z))
        self.maximum = Vec3(max(p0.x, p1.x), max(p0.y, p1.y), max(p0.z, p1.z))
        self.material = material

        lo, hi = self.minimum, self.maximum
        dx, dy, dz = hi.x - lo.x, hi.y - lo.y, hi.z - lo.z
        self.sides = HittableList(
            [
                PlaneY(lo.x, hi.y, lo.z, dx, dz, material),  # top
                PlaneY(lo.x, lo.y, lo.z, dx, dz, material, flip_normal=True),  # bottom
                PlaneX(lo.x, lo.y, lo.z, dy, dz, material, flip_normal=True),  # left
                PlaneX(hi.x, lo.y, lo.z, dy, dz, material),  # right
                PlaneZ(lo.x, lo.y, lo.z, dx, dy, material, flip_normal=True),  # front
                PlaneZ(lo.x, lo.y, hi.z, dx, dy, material),  # back
            ]
        )

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        return self.sides.hit(ray, t_min, t_max)

    def bounding_box(self, time0: float, time1: float) -> AABB | None:
        return AABB(self.minimum, self.maximum)

    def __repr__(self) -> str:
        return f"Box(minimum={self.minimum!r}, maximum={self.maximum!r})"
