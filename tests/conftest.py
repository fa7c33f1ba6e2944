"""Pytest configuration for path tracer tests.

This module provides shared fixtures for all test modules: a seeded random
generator (every sampling function takes one explicitly) and a few common
materials.
"""

import random

import pytest

from pathtracer.core.vec3 import Color
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal


@pytest.fixture
def rng():
    """A deterministic generator so sampled tests are reproducible."""
    return random.Random(42)


@pytest.fixture
def gray():
    """A mid-gray diffuse material."""
    return Lambertian(Color(0.5, 0.5, 0.5))


@pytest.fixture
def mirror():
    """A perfect mirror."""
    return Metal(Color(0.9, 0.9, 0.9), roughness=0.0)


@pytest.fixture
def glass():
    """Standard glass."""
    return Dielectric(1.5)


@pytest.fixture
def lamp():
    """A bright white emitter."""
    return DiffuseLight(Color(4.0, 4.0, 4.0))
