"""Intersection protocol shared by every primitive.

Every scene object implements two capabilities:
    hit(ray, t_min, t_max) -> HitRecord | None
        The nearest intersection with distance in (t_min, t_max), or None.
    bounding_box(time0, time1) -> AABB | None
        A box enclosing the object over the shutter interval, or None when the
        object has no finite extent in that configuration.

"No interaction" is always represented by None; intersection never raises.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Vec3

if TYPE_CHECKING:
    from pathtracer.geometry.aabb import AABB
    from pathtracer.materials.base import Material


@dataclass
class HitRecord:
    """Record of a ray-primitive intersection.

    Attributes:
        point: The world-space point where the ray hit the surface.
        normal: The unit surface normal, always facing against the incoming
            ray (see set_face_normal).
        t: The ray parameter of the hit.
        u: First surface texture coordinate.
        v: Second surface texture coordinate.
        front_face: True if the ray hit the outside of the surface, False if
            the normal had to be flipped because the ray came from inside.
        material: The material of the hit primitive. Shared by reference with
            every other primitive using it, never copied.
    """

    point: Vec3
    normal: Vec3
    t: float
    u: float
    v: float
    front_face: bool
    material: Material

    @classmethod
    def from_outward_normal(
        cls,
        ray: Ray,
        t: float,
        point: Vec3,
        outward_normal: Vec3,
        u: float,
        v: float,
        material: Material,
    ) -> HitRecord:
        """Create a record whose normal is corrected against the ray."""
        record = cls(point, outward_normal, t, u, v, True, material)
        record.set_face_normal(ray, outward_normal)
        return record

    def set_face_normal(self, ray: Ray, outward_normal: Vec3) -> None:
        """Orient the normal against the ray and record which side was hit.

        Args:
            ray: The incoming ray.
            outward_normal: The geometric normal pointing out of the surface
                (unit length).
        """
        self.front_face = ray.direction.dot(outward_normal) < 0.0
        self.normal = outward_normal if self.front_face else -outward_normal


class Hittable(ABC):
    """Base class for everything a ray can intersect."""

    @abstractmethod
    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Return the nearest hit with t in (t_min, t_max), or None."""

    @abstractmethod
    def bounding_box(self, time0: float, time1: float) -> AABB | None:
        """Return a box enclosing the object over [time0, time1], or None."""
