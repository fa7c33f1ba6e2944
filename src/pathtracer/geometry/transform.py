"""Instance transforms: translation and rotation about the Y axis.

Both wrappers move the incoming ray into the wrapped object's local space,
delegate the intersection, then move the resulting point and normal back into
world space. The front-face flag is recomputed from the world-space ray so the
normal always opposes the ray that was actually cast.
"""

from __future__ import annotations

import math

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Vec3
from pathtracer.geometry.aabb import AABB
from pathtracer.geometry.hittable import Hittable, HitRecord


def _outward(rec: HitRecord) -> Vec3:
    """Recover the geometric outward normal from a face-corrected record."""
    return rec.normal if rec.front_face else -rec.normal


class Translate(Hittable):
    """Displace a wrapped primitive by a fixed offset.

    Attributes:
        instance: The wrapped primitive.
        offset: The world-space displacement.
    """

    def __init__(self, instance: Hittable, offset: Vec3) -> None:
        self.instance = instance
        self.offset = offset

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        moved = Ray(ray.origin - self.offset, ray.direction, ray.time)
        rec = self.instance.hit(moved, t_min, t_max)
        if rec is None:
            return None
        rec.point = rec.point + self.offset
        rec.set_face_normal(ray, _outward(rec))
        return rec

    def bounding_box(self, time0: float, time1: float) -> AABB | None:
        box = self.instance.bounding_box(time0, time1)
        if box is None:
            return None
        return AABB(box.minimum + self.offset, box.maximum + self.offset)

    def __repr__(self) -> str:
        return f"Translate({self.instance!r}, offset={self.offset!r})"


class YawRotation(Hittable):
    """Rotate a wrapped primitive about the Y axis.

    sin/cos of the angle and the rotated bounding box are computed once at
    construction. The bounding box of the instance is sampled over the
    interval [0, 1]; if the instance has none, the rotation has none either.

    Attributes:
        instance: The wrapped primitive.
        sin_theta: Sine of the rotation angle.
        cos_theta: Cosine of the rotation angle.
    """

    def __init__(self, instance: Hittable, angle: float) -> None:
        """Initialize the rotation.

        Args:
            instance: The primitive to rotate.
            angle: The rotation angle in degrees (counter-clockwise when
                looking down the Y axis).
        """
        self.instance = instance
        radians = math.radians(angle)
        self.sin_theta = math.sin(radians)
        self.cos_theta = math.cos(radians)
        self._box = self._rotated_box(instance.bounding_box(0.0, 1.0))

    def _rotated_box(self, box: AABB | None) -> AABB | None:
        if box is None:
            return None
        lo = [math.inf, math.inf, math.inf]
        hi = [-math.inf, -math.inf, -math.inf]
        for x in (box.minimum.x, box.maximum.x):
            for y in (box.minimum.y, box.maximum.y):
                for z in (box.minimum.z, box.maximum.z):
                    corner = self._to_world(Vec3(x, y, z))
                    for axis in range(3):
                        lo[axis] = min(lo[axis], corner[axis])
                        hi[axis] = max(hi[axis], corner[axis])
        return AABB(Vec3(*lo), Vec3(*hi))

    def _to_local(self, p: Vec3) -> Vec3:
        return Vec3(
            self.cos_theta * p.x - self.sin_theta * p.z,
            p.y,
            self.sin_theta * p.x + self.cos_theta * p.z,
        )

    def _to_world(self, p: Vec3) -> Vec3:
        return Vec3(
            self.cos_theta * p.x + self.sin_theta * p.z,
            p.y,
            -self.sin_theta * p.x + self.cos_theta * p.z,
        )

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        rotated = Ray(self._to_local(ray.origin), self._to_local(ray.direction), ray.time)
        rec = self.instance.hit(rotated, t_min, t_max)
        if rec is None:
            return None
        rec.point = self._to_world(rec.point)
        rec.set_face_normal(ray, self._to_world(_outward(rec)))
        return rec

    def bounding_box(self, time0: float, time1: float) -> AABB | None:
        return self._box

    def __repr__(self) -> str:
        angle = math.degrees(math.atan2(self.sin_theta, self.cos_theta))
        return f"YawRotation({self.instance!r}, angle={angle:.3f})"
