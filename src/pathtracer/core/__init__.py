"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vec3: Immutable 3-component vector used for points, directions and colors
    ray: Ray data structure, optics helpers and random sampling utilities
    integrator: Path tracing radiance estimate and background policies
    renderer: Multi-threaded render scheduler and RenderSettings
    progress: Non-blocking progress reporting through tqdm

Every random function takes an explicit ``random.Random`` so each render
worker owns its generator.
"""

from .ray import (
    Ray,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_unit_vector,
    random_vec3,
    reflect,
    refract,
    schlick_reflectance,
)
from .vec3 import Color, Vec3

# Note: integrator, renderer and progress are NOT imported here because they
# depend on the geometry package, which itself imports core.ray.
# Import them directly, e.g.:
#   from pathtracer.core.renderer import Renderer, RenderSettings

__all__ = [
    "Vec3",
    "Color",
    "Ray",
    "reflect",
    "refract",
    "schlick_reflectance",
    "random_vec3",
    "random_in_unit_sphere",
    "random_unit_vector",
    "random_in_unit_disk",
]
