"""Sphere primitives: stationary and linearly moving.

The ray-sphere intersection is found by solving:
    |ray_origin + t * ray_direction - center|^2 = radius^2

Expanding and rearranging gives the quadratic equation:
    a*t^2 + 2*h*t + c = 0

where:
    a = dot(direction, direction)
    h = dot(direction, oc)  (half of traditional b)
    c = dot(oc, oc) - radius^2
    oc = origin - center

Using the half-b form avoids the factors of 2 and 4 in the discriminant and
keeps the arithmetic slightly better conditioned. The smaller root is tried
first and the larger one only when the smaller lies outside the interval.

A negative radius is allowed and flips the outward normal, which is the usual
trick for modelling the inner surface of a hollow glass sphere.

Example:
    >>> from pathtracer.core.ray import Ray
    >>> from pathtracer.core.vec3 import Vec3
    >>> from pathtracer.geometry.sphere import Sphere
    >>> from pathtracer.materials.lambertian import Lambertian
    >>> sphere = Sphere(Vec3(0, 0, -1), 0.5, Lambertian(Vec3(0.5, 0.5, 0.5)))
    >>> rec = sphere.hit(Ray(Vec3(0, 0, 0), Vec3(0, 0, -1)), 0.001, 100.0)
    >>> rec.t
    0.5
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Vec3
from pathtracer.geometry.aabb import AABB
from pathtracer.geometry.hittable import Hittable, HitRecord

if TYPE_CHECKING:
    from pathtracer.materials.base import Material


def sphere_uv(outward_normal: Vec3) -> tuple[float, float]:
    """Map a point on the unit sphere to texture coordinates.

    u is the angle around the Y axis starting from X=-1, v the angle from
    Y=-1 to Y=+1, both normalized to [0, 1]:
        (1, 0, 0) -> (0.50, 0.50)     (-1, 0, 0) -> (0.00, 0.50)
        (0, 1, 0) -> (0.50, 1.00)     (0, -1, 0) -> (0.50, 0.00)
        (0, 0, 1) -> (0.25, 0.50)     (0, 0, -1) -> (0.75, 0.50)

    Args:
        outward_normal: Unit vector from the sphere center to the point.

    Returns:
        Tuple of (u, v).
    """
    y = max(-1.0, min(1.0, outward_normal[1]))
    theta = math.acos(-y)
    phi = math.atan2(-outward_normal[2], outward_normal[0]) + math.pi
    return phi / (2.0 * math.pi), theta / math.pi


def hit_sphere(
    center: Vec3,
    radius: float,
    material: Material,
    ray: Ray,
    t_min: float,
    t_max: float,
) -> HitRecord | None:
    """Intersect a ray with a sphere at a given center.

    Args:
        center: The sphere center at the ray's time.
        radius: The sphere radius.
        material: Material reported in the hit record.
        ray: The ray to test.
        t_min: Exclusive lower bound on the hit distance.
        t_max: Exclusive upper bound on the hit distance.

    Returns:
        The hit record for the nearest root in (t_min, t_max), or None.
    """
    direction = ray.direction
    oc = ray.origin - center
    a = direction.length_squared()
    h = oc.dot(direction)
    c = oc.length_squared() - radius * radius

    discriminant = h * h - a * c
    if discriminant < 0.0 or a == 0.0:
        return None

    sqrt_d = math.sqrt(discriminant)
    root = (-h - sqrt_d) / a
    if root <= t_min or root >= t_max:
        root = (-h + sqrt_d) / a
        if root <= t_min or root >= t_max:
            return None

    point = ray.at(root)
    outward_normal = (point - center) / radius
    u, v = sphere_uv(outward_normal)
    return HitRecord.from_outward_normal(ray, root, point, outward_normal, u, v, material)


class Sphere(Hittable):
    """A stationary sphere.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere.
        material: The shared material of the surface.
    """

    def __init__(self, center: Vec3, radius: float, material: Material) -> None:
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        return hit_sphere(self.center, self.radius, self.material, ray, t_min, t_max)

    def bounding_box(self, time0: float, time1: float) -> AABB | None:
        r = Vec3.splat(abs(self.radius))
        return AABB(self.center - r, self.center + r)

    def __repr__(self) -> str:
        return f"Sphere(center={self.center!r}, radius={self.radius!r})"


class MovingSphere(Hittable):
    """A sphere whose center moves linearly between two keyframes.

    The center at time t is:
        center0 + ((t - time0) / (time1 - time0)) * (center1 - center0)

    Times outside the keyframe interval extrapolate along the same line.

    Attributes:
        center0: The center at time0.
        center1: The center at time1.
        time0: The first keyframe time.
        time1: The second keyframe time.
        radius: The radius of the sphere.
        material: The shared material of the surface.
    """

    def __init__(
        self,
        center0: Vec3,
        center1: Vec3,
        time0: float,
        time1: float,
        radius: float,
        material: Material,
    ) -> None:
        """Initialize a moving sphere.

        Raises:
            ValueError: If the keyframe interval has zero length.
        """
        if time1 == time0:
            raise ValueError(
                f"Moving sphere keyframe times must differ (got {time0} and {time1})"
            )
        self.center0 = center0
        self.center1 = center1
        self.time0 = time0
        self.time1 = time1
        self.radius = radius
        self.material = material

    def center(self, time: float) -> Vec3:
        """Return the interpolated center at the given time."""
        fraction = (time - self.time0) / (self.time1 - self.time0)
        return self.center0 + fraction * (self.center1 - self.center0)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        return hit_sphere(
            self.center(ray.time), self.radius, self.material, ray, t_min, t_max
        )

    def bounding_box(self, time0: float, time1: float) -> AABB | None:
        r = Vec3.splat(abs(self.radius))
        start = self.center(time0)
        end = self.center(time1)
        return AABB.union(AABB(start - r, start + r), AABB(end - r, end + r))

    def __repr__(self) -> str:
        return (
            f"MovingSphere(center0={self.center0!r}, center1={self.center1!r}, "
            f"time0={self.time0!r}, time1={self.time1!r}, radius={self.radius!r})"
        )
