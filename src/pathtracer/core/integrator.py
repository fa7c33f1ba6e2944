"""Path tracing integrator for Monte Carlo light transport.

The radiance along a ray is defined recursively:

    radiance(ray, 0)     = black
    radiance(ray, depth) = background(ray)                     on a miss
                         = emitted                             if absorbed
                         = emitted + attenuation * radiance(scattered, depth - 1)

The recursion is evaluated as a loop that carries the product of all
attenuations seen so far (the throughput), so arbitrarily deep paths never
grow the Python call stack.

Key features:
    - Material dispatch through Material.scatter / Material.emitted
    - Hard depth cutoff (no Russian roulette)
    - Explicit background policy per scene
    - Self-intersection avoidance via T_MIN

Example:
    >>> import random
    >>> from pathtracer.core.integrator import SkyGradient, radiance
    >>> color = radiance(ray, world, 50, SkyGradient(), random.Random(0))
"""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Color
from pathtracer.geometry.hittable import Hittable

# =============================================================================
# Rendering Constants
# =============================================================================

# Maximum ray bounces used when callers do not choose one
MAX_DEPTH = 50

# Hits closer than this are ignored so a scattered ray does not re-hit the
# surface it just left
T_MIN = 1e-3
T_MAX = math.inf

BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)


# =============================================================================
# Backgrounds
# =============================================================================


class Background(ABC):
    """Radiance returned for rays that leave the scene."""

    @abstractmethod
    def value(self, ray: Ray) -> Color:
        """Return the radiance arriving along an escaped ray."""


class ConstantBackground(Background):
    """The same radiance in every direction.

    Black by default, so emissive materials are the only light source.

    Attributes:
        color: The background radiance.
    """

    def __init__(self, color: Color = BLACK) -> None:
        self.color = color

    def value(self, ray: Ray) -> Color:
        return self.color

    def __repr__(self) -> str:
        return f"ConstantBackground({self.color!r})"


class SkyGradient(Background):
    """Vertical blend between two colors, driven by the ray's unit y.

    ``bottom`` is returned for rays pointing straight down, ``top`` for rays
    pointing straight up, with linear interpolation in between.

    Attributes:
        bottom: Color at the nadir.
        top: Color at the zenith.
    """

    def __init__(
        self,
        bottom: Color = WHITE,
        top: Color = Color(0.5, 0.7, 1.0),
    ) -> None:
        self.bottom = bottom
        self.top = top

    def value(self, ray: Ray) -> Color:
        t = 0.5 * (ray.direction.unit().y + 1.0)
        return (1.0 - t) * self.bottom + t * self.top

    def __repr__(self) -> str:
        return f"SkyGradient(bottom={self.bottom!r}, top={self.top!r})"


# =============================================================================
# Path Tracing
# =============================================================================


def radiance(
    ray: Ray,
    world: Hittable,
    depth: int,
    background: Background,
    rng: random.Random,
    t_min: float = T_MIN,
) -> Color:
    """Estimate the radiance arriving at the ray origin along the ray.

    Args:
        ray: The ray to trace.
        world: The scene root (a HittableList or BvhNode).
        depth: Remaining bounce budget. A depth of 0 contributes no light.
        background: Radiance for rays that escape the scene.
        rng: Random generator owned by the calling worker.
        t_min: Lower bound of the hit interval for every bounce.

    Returns:
        The estimated radiance (linear RGB). Components can exceed 1.0 when
        emitters are brighter than 1.
    """
    result = BLACK
    throughput = WHITE

    while depth > 0:
        hit = world.hit(ray, t_min, T_MAX)
        if hit is None:
            return result + throughput * background.value(ray)

        emitted = hit.material.emitted(hit.u, hit.v, hit.point)
        result = result + throughput * emitted

        scatter = hit.material.scatter(ray, hit, rng)
        if scatter is None:
            return result

        throughput = throughput * scatter.attenuation
        ray = scatter.ray
        depth -= 1

    return result
