"""Ray data structure and sampling utilities for Monte Carlo ray tracing.

This module provides the Ray class together with the optics helpers
(reflection, refraction, Schlick reflectance) and the random sampling
functions shared by the camera and the materials.

All random functions take an explicit ``random.Random`` instance. Each render
worker owns its own generator, so no random state is shared between threads.

Example:
    >>> import random
    >>> from pathtracer.core.ray import Ray, random_in_unit_sphere
    >>> from pathtracer.core.vec3 import Vec3
    >>> ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
    >>> ray.at(5.0)  # Point 5 units along the ray
    Vec3(0.0, 0.0, -5.0)
    >>> p = random_in_unit_sphere(random.Random(7))
"""

from __future__ import annotations

import math
import random

from pathtracer.core.vec3 import Vec3


class Ray:
    """A ray with an origin point, a direction vector and a time stamp.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. It is not required to be
            normalized; intersection routines handle arbitrary lengths.
        time: The moment inside the camera shutter interval at which the ray
            was cast, used to position moving geometry.
    """

    __slots__ = ("origin", "direction", "time")

    def __init__(self, origin: Vec3, direction: Vec3, time: float = 0.0) -> None:
        self.origin = origin
        self.direction = direction
        self.time = time

    def at(self, t: float) -> Vec3:
        """Compute the point ``origin + t * direction``."""
        o = self.origin
        d = self.direction
        return Vec3(o[0] + t * d[0], o[1] + t * d[1], o[2] + t * d[2])

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin!r}, direction={self.direction!r}, time={self.time!r})"


# =============================================================================
# Optics
# =============================================================================


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a unit normal: ``v - 2(v.n)n``."""
    return incident - 2.0 * incident.dot(normal) * normal


def refract(unit_incident: Vec3, normal: Vec3, refraction_ratio: float) -> Vec3:
    """Refract a unit incident vector through a surface using Snell's law.

    The refracted direction is split into the components perpendicular and
    parallel to the normal.

    Args:
        unit_incident: The incoming direction (unit length).
        normal: The surface normal facing the incident ray (unit length).
        refraction_ratio: Ratio of refractive indices (n_incident / n_transmitted).

    Returns:
        The refracted direction. Callers are expected to rule out total
        internal reflection beforehand.
    """
    cos_theta = min(-unit_incident.dot(normal), 1.0)
    out_perp = refraction_ratio * (unit_incident + cos_theta * normal)
    out_parallel = -math.sqrt(abs(1.0 - out_perp.length_squared())) * normal
    return out_perp + out_parallel


def schlick_reflectance(cosine: float, refraction_ratio: float) -> float:
    """Approximate the Fresnel reflectance with Schlick's polynomial.

    r0 = ((1 - ratio) / (1 + ratio))^2
    R(theta) = r0 + (1 - r0)(1 - cos theta)^5
    """
    r0 = (1.0 - refraction_ratio) / (1.0 + refraction_ratio)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def random_vec3(rng: random.Random, lo: float = 0.0, hi: float = 1.0) -> Vec3:
    """Generate a vector with components drawn uniformly from [lo, hi)."""
    return Vec3(rng.uniform(lo, hi), rng.uniform(lo, hi), rng.uniform(lo, hi))


def random_in_unit_sphere(rng: random.Random) -> Vec3:
    """Generate a random point strictly inside the unit sphere.

    Uses rejection sampling over the enclosing cube, which accepts about
    52% of candidates.
    """
    while True:
        x = rng.random() * 2.0 - 1.0
        y = rng.random() * 2.0 - 1.0
        z = rng.random() * 2.0 - 1.0
        if x * x + y * y + z * z < 1.0:
            return Vec3(x, y, z)


def random_unit_vector(rng: random.Random) -> Vec3:
    """Generate a random unit vector uniformly distributed on the sphere."""
    while True:
        p = random_in_unit_sphere(rng)
        length_sq = p.length_squared()
        # Points too close to the center lose precision when normalized
        if length_sq > 1e-16:
            return p / math.sqrt(length_sq)


def random_in_unit_disk(rng: random.Random) -> Vec3:
    """Generate a random point inside the unit disk in the xy-plane.

    Used by the camera to sample the lens aperture for depth of field.
    """
    while True:
        x = rng.random() * 2.0 - 1.0
        y = rng.random() * 2.0 - 1.0
        if x * x + y * y < 1.0:
            return Vec3(x, y, 0.0)
