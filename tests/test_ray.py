"""Unit tests for rays, optics helpers and random sampling.

Tests cover:
- Ray evaluation and time stamps
- Reflection about a normal
- Refraction (straight through, Snell's law)
- Schlick reflectance at normal and grazing incidence
- Sampling helpers produce points in their domains
"""

import math
import random

import pytest

from pathtracer.core.ray import (
    Ray,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_unit_vector,
    random_vec3,
    reflect,
    refract,
    schlick_reflectance,
)
from pathtracer.core.vec3 import Vec3


class TestRay:
    """Tests for the Ray class."""

    def test_at(self):
        """at(t) walks t directions from the origin."""
        ray = Ray(Vec3(1, 2, 3), Vec3(0, 0, -2))
        assert ray.at(0.0) == Vec3(1, 2, 3)
        assert ray.at(2.5) == Vec3(1, 2, -2)

    def test_default_time_is_zero(self):
        """Rays default to time 0."""
        assert Ray(Vec3(), Vec3(1, 0, 0)).time == 0.0

    def test_time_is_kept(self):
        """The time stamp is stored unchanged."""
        assert Ray(Vec3(), Vec3(1, 0, 0), 0.75).time == 0.75


class TestOptics:
    """Tests for reflect, refract and schlick_reflectance."""

    def test_reflect_flips_normal_component(self):
        """Reflection mirrors the component along the normal."""
        reflected = reflect(Vec3(1, -1, 0), Vec3(0, 1, 0))
        assert reflected == Vec3(1, 1, 0)

    def test_refract_straight_through_at_normal_incidence(self):
        """A ray along the normal is not bent."""
        out = refract(Vec3(0, 0, -1), Vec3(0, 0, 1), 1.0 / 1.5)
        assert out.x == pytest.approx(0.0)
        assert out.y == pytest.approx(0.0)
        assert out.z == pytest.approx(-1.0)

    def test_refract_obeys_snell(self):
        """sin(theta_t) = ratio * sin(theta_i) for a unit incident ray."""
        ratio = 1.0 / 1.5
        theta_i = math.radians(30.0)
        incident = Vec3(math.sin(theta_i), -math.cos(theta_i), 0.0)
        out = refract(incident, Vec3(0, 1, 0), ratio)
        sin_t = out.x / out.length()
        assert sin_t == pytest.approx(ratio * math.sin(theta_i))
        assert out.length() == pytest.approx(1.0)

    def test_schlick_normal_incidence(self):
        """At normal incidence the reflectance is r0."""
        r0 = ((1 - 1.5) / (1 + 1.5)) ** 2
        assert schlick_reflectance(1.0, 1.5) == pytest.approx(r0)

    def test_schlick_grazing_incidence(self):
        """At grazing incidence everything reflects."""
        assert schlick_reflectance(0.0, 1.5) == pytest.approx(1.0)

    def test_schlick_matched_media(self):
        """Identical media do not reflect at normal incidence."""
        assert schlick_reflectance(1.0, 1.0) == pytest.approx(0.0)


class TestSampling:
    """Tests for the random sampling helpers."""

    def test_random_vec3_range(self):
        """Components are drawn from [lo, hi)."""
        rng = random.Random(1)
        for _ in range(200):
            v = random_vec3(rng, 0.5, 1.0)
            assert all(0.5 <= c < 1.0 for c in v)

    def test_in_unit_sphere(self):
        """Points lie strictly inside the unit sphere."""
        rng = random.Random(2)
        for _ in range(500):
            assert random_in_unit_sphere(rng).length_squared() < 1.0

    def test_unit_vector(self):
        """Unit vectors have length one."""
        rng = random.Random(3)
        for _ in range(500):
            assert random_unit_vector(rng).length() == pytest.approx(1.0)

    def test_unit_vectors_cover_sphere(self):
        """The mean of many unit vectors is close to the origin."""
        rng = random.Random(4)
        total = Vec3()
        n = 4000
        for _ in range(n):
            total = total + random_unit_vector(rng)
        assert (total / n).length() < 0.05

    def test_in_unit_disk(self):
        """Disk samples stay in the xy-plane inside the unit circle."""
        rng = random.Random(5)
        for _ in range(500):
            p = random_in_unit_disk(rng)
            assert p.z == 0.0
            assert p.x * p.x + p.y * p.y < 1.0

    def test_same_seed_same_sequence(self):
        """An explicit generator makes sampling reproducible."""
        a = [random_unit_vector(random.Random(9)) for _ in range(3)]
        b = [random_unit_vector(random.Random(9)) for _ in range(3)]
        assert a == b
