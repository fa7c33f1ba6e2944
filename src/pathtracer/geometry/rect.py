"""Axis-aligned rectangle primitives.

A rectangle lies in a plane perpendicular to one coordinate axis (the fixed
axis) and spans a finite extent along the two remaining axes:

    PlaneX: x = const, spanning y and z
    PlaneY: y = const, spanning x and z
    PlaneZ: z = const, spanning x and y

All three are built the same way, from the corner (x, y, z) with the smallest
coordinates and the side lengths along the two spanned axes in axis order.

Ray-rectangle intersection solves a single linear equation:
1. Find where the ray crosses the plane of the fixed axis
2. Reject if that distance is outside the valid interval
3. Reject if the crossing lies outside the rectangle's extent

Example:
    >>> from pathtracer.core.vec3 import Vec3
    >>> from pathtracer.geometry.rect import PlaneY
    >>> from pathtracer.materials.lambertian import Lambertian
    >>> # Floor at y=0 spanning x=[0, 2] and z=[0, 3]
    >>> floor = PlaneY(0.0, 0.0, 0.0, 2.0, 3.0, Lambertian(Vec3(0.7, 0.7, 0.7)))
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Vec3
from pathtracer.geometry.aabb import AABB
from pathtracer.geometry.hittable import Hittable, HitRecord

if TYPE_CHECKING:
    from pathtracer.materials.base import Material

# Half-thickness given to the fixed axis so the bounding box is never flat
BOX_PADDING = 1e-4

_UNIT_AXES = (Vec3(1.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0), Vec3(0.0, 0.0, 1.0))


class AxisAlignedRect(Hittable):
    """A finite rectangle perpendicular to one coordinate axis.

    Subclasses only choose the fixed axis; the intersection logic is shared.

    Attributes:
        axis: Index of the fixed axis (0 = x, 1 = y, 2 = z).
        k: Coordinate of the plane along the fixed axis.
        a0, a1: Extent along the first spanned axis.
        b0, b1: Extent along the second spanned axis.
        material: The shared material of the surface.
    """

    axis: int = 2

    def __init__(
        self,
        x: float,
        y: float,
        z: float,
        extent_a: float,
        extent_b: float,
        material: Material,
        flip_normal: bool = False,
    ) -> None:
        """Initialize the rectangle from its lower corner and side lengths.

        Args:
            x: X coordinate of the lower corner.
            y: Y coordinate of the lower corner.
            z: Z coordinate of the lower corner.
            extent_a: Side length along the first spanned axis.
            extent_b: Side length along the second spanned axis.
            material: The material of the surface.
            flip_normal: Use -axis instead of +axis as the outward normal, for
                faces that look toward the negative side of a closed solid.

        Raises:
            ValueError: If either side length is not positive.
        """
        if extent_a <= 0.0 or extent_b <= 0.0:
            raise ValueError(
                f"Rectangle side lengths must be positive (got {extent_a}, {extent_b})"
            )
        corner = (x, y, z)
        self._a_axis, self._b_axis = (i for i in range(3) if i != self.axis)
        self.k = corner[self.axis]
        self.a0 = corner[self._a_axis]
        self.a1 = self.a0 + extent_a
        self.b0 = corner[self._b_axis]
        self.b1 = self.b0 + extent_b
        self.material = material
        self.flip_normal = flip_normal

    @property
    def outward_normal(self) -> Vec3:
        normal = _UNIT_AXES[self.axis]
        return -normal if self.flip_normal else normal

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        denom = ray.direction[self.axis]
        if denom == 0.0:
            # Parallel to the plane
            return None

        t = (self.k - ray.origin[self.axis]) / denom
        if t <= t_min or t >= t_max:
            return None

        a = ray.origin[self._a_axis] + t * ray.direction[self._a_axis]
        b = ray.origin[self._b_axis] + t * ray.direction[self._b_axis]
        if a < self.a0 or a > self.a1 or b < self.b0 or b > self.b1:
            return None

        u = (a - self.a0) / (self.a1 - self.a0)
        v = (b - self.b0) / (self.b1 - self.b0)
        return HitRecord.from_outward_normal(
            ray, t, ray.at(t), self.outward_normal, u, v, self.material
        )

    def bounding_box(self, time0: float, time1: float) -> AABB | None:
        lo = [0.0, 0.0, 0.0]
        hi = [0.0, 0.0, 0.0]
        lo[self.axis], hi[self.axis] = self.k - BOX_PADDING, self.k + BOX_PADDING
        lo[self._a_axis], hi[self._a_axis] = self.a0, self.a1
        lo[self._b_axis], hi[self._b_axis] = self.b0, self.b1
        return AABB(Vec3(*lo), Vec3(*hi))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(k={self.k!r}, a=({self.a0!r}, {self.a1!r}), "
            f"b=({self.b0!r}, {self.b1!r}))"
        )


class PlaneX(AxisAlignedRect):
    """Rectangle at constant x spanning y (extent_a) and z (extent_b)."""

    axis = 0


class PlaneY(AxisAlignedRect):
    """Rectangle at constant y spanning x (extent_a) and z (extent_b)."""

    axis = 1


class PlaneZ(AxisAlignedRect):
    """Rectangle at constant z spanning x (extent_a) and y (extent_b)."""

    axis = 2
