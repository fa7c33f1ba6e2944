"""Tests for the Metal material.

Tests cover:
- Perfect mirror reflection at zero roughness
- Roughness clamping and fuzzed reflections
- Absorption of reflections that end up below the surface
"""

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Color, Vec3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.metal import Metal


def floor_hit(material, normal=Vec3(0, 1, 0)):
    return HitRecord(Vec3(0, 0, 0), normal, 1.0, 0.0, 0.0, True, material)


class TestMirror:
    """Tests for zero-roughness reflection."""

    def test_mirror_direction(self, mirror, rng):
        """A 45 degree ray reflects to 45 degrees on the other side."""
        ray = Ray(Vec3(-1, 1, 0), Vec3(1, -1, 0), time=0.7)
        result = mirror.scatter(ray, floor_hit(mirror), rng)

        assert result is not None
        expected = Vec3(1, 1, 0).unit()
        assert result.ray.direction == pytest.approx(expected)
        assert result.ray.origin == Vec3(0, 0, 0)
        assert result.ray.time == 0.7

    def test_normal_incidence(self, mirror, rng):
        """A ray along the normal bounces straight back."""
        ray = Ray(Vec3(0, 5, 0), Vec3(0, -2, 0))
        result = mirror.scatter(ray, floor_hit(mirror), rng)
        assert result.ray.direction == pytest.approx((0.0, 1.0, 0.0))

    def test_attenuation_is_albedo(self, mirror, rng):
        ray = Ray(Vec3(0, 1, 0), Vec3(0, -1, 0))
        result = mirror.scatter(ray, floor_hit(mirror), rng)
        assert result.attenuation == Color(0.9, 0.9, 0.9)

    def test_grazing_from_behind_absorbed(self, mirror, rng):
        """A reflection that does not leave the surface is absorbed."""
        # Normal points along the ray, so the reflection points into the surface
        ray = Ray(Vec3(0, -1, 0), Vec3(0, 1, 0))
        assert mirror.scatter(ray, floor_hit(mirror), rng) is None


class TestRoughness:
    """Tests for fuzzed reflection."""

    @pytest.mark.parametrize("given, expected", [(-0.5, 0.0), (0.3, 0.3), (4.0, 1.0)])
    def test_clamped(self, given, expected):
        assert Metal(Color(1, 1, 1), given).roughness == expected

    def test_fuzz_stays_near_mirror_direction(self, rng):
        """Fuzzed reflections deviate by at most the roughness radius."""
        metal = Metal(Color(1, 1, 1), roughness=0.2)
        ray = Ray(Vec3(0, 1, 0), Vec3(0, -1, 0))
        for _ in range(300):
            result = metal.scatter(ray, floor_hit(metal), rng)
            assert result is not None
            deviation = result.ray.direction - Vec3(0, 1, 0)
            assert deviation.length() < 0.2 + 1e-12

    def test_rough_grazing_sometimes_absorbed(self, rng):
        """Near-grazing rays with full roughness are partly absorbed."""
        metal = Metal(Color(1, 1, 1), roughness=1.0)
        ray = Ray(Vec3(-1, 0.05, 0), Vec3(1, -0.05, 0))
        outcomes = [metal.scatter(ray, floor_hit(metal), rng) for _ in range(300)]
        assert any(result is None for result in outcomes)
        assert any(result is not None for result in outcomes)
