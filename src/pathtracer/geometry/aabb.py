"""Axis-aligned bounding boxes.

An AABB is the conservative volume used by the BVH to skip whole groups of
primitives. Intersection uses the slab test: for each axis the ray's entry and
exit distances through the two bounding planes are computed and the running
interval is narrowed until it becomes empty or all three axes are processed.

Rays with a zero direction component produce infinite slab distances. The
comparisons below handle those infinities correctly, so no special casing is
needed beyond avoiding Python's ZeroDivisionError.
"""

from __future__ import annotations

import math

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Vec3


class BoundingBoxError(RuntimeError):
    """Raised when a primitive cannot produce a bounding box.

    This is the unsupported-geometry error: it surfaces from BVH construction
    and scene setup, never from per-ray intersection.
    """


def _inverse(component: float) -> float:
    """Return 1/component with IEEE-754 semantics for zero."""
    if component == 0.0:
        return math.copysign(math.inf, component)
    return 1.0 / component


class AABB:
    """An axis-aligned box given by its minimum and maximum corners.

    Attributes:
        minimum: The corner with the smallest coordinates.
        maximum: The corner with the largest coordinates.
    """

    __slots__ = ("minimum", "maximum")

    def __init__(self, minimum: Vec3, maximum: Vec3) -> None:
        self.minimum = minimum
        self.maximum = maximum

    @staticmethod
    def union(a: AABB, b: AABB) -> AABB:
        """Return the tightest box containing both inputs."""
        return AABB(
            Vec3(
                min(a.minimum[0], b.minimum[0]),
                min(a.minimum[1], b.minimum[1]),
                min(a.minimum[2], b.minimum[2]),
            ),
            Vec3(
                max(a.maximum[0], b.maximum[0]),
                max(a.maximum[1], b.maximum[1]),
                max(a.maximum[2], b.maximum[2]),
            ),
        )

    def hit(
        self,
        ray: Ray,
        t_min: float = -math.inf,
        t_max: float = math.inf,
    ) -> tuple[float, float] | None:
        """Intersect the ray with the box using the slab test.

        Args:
            ray: The ray to test.
            t_min: Lower bound of the initial parametric interval.
            t_max: Upper bound of the initial parametric interval.

        Returns:
            The ``(entry, exit)`` parametric interval inside the box, or None
            as soon as the interval becomes empty on any axis.
        """
        origin = ray.origin
        direction = ray.direction
        for axis in range(3):
            inv_d = _inverse(direction[axis])
            start = (self.minimum[axis] - origin[axis]) * inv_d
            end = (self.maximum[axis] - origin[axis]) * inv_d
            if inv_d < 0.0:
                start, end = end, start
            # nan (0 * inf) leaves the bound untouched
            if start > t_min:
                t_min = start
            if end < t_max:
                t_max = end
            if t_max <= t_min:
                return None
        return t_min, t_max

    def contains(self, point: Vec3) -> bool:
        return all(self.minimum[i] <= point[i] <= self.maximum[i] for i in range(3))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AABB):
            return NotImplemented
        return self.minimum == other.minimum and self.maximum == other.maximum

    def __repr__(self) -> str:
        return f"AABB(minimum={self.minimum!r}, maximum={self.maximum!r})"


def surrounding_box(a: AABB, b: AABB) -> AABB:
    """Alias for :meth:`AABB.union`."""
    return AABB.union(a, b)
