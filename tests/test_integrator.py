"""Tests for the radiance estimator and backgrounds.

Tests cover:
- Backgrounds (constant and sky gradient)
- Depth budget handling
- Emission, absorption and attenuation along a path
- The hit interval lower bound
"""

import math

import pytest

from pathtracer.core.integrator import (
    MAX_DEPTH,
    T_MIN,
    ConstantBackground,
    SkyGradient,
    radiance,
)
from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Color, Vec3
from pathtracer.geometry.hittable_list import HittableList
from pathtracer.geometry.rect import PlaneY
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal

BLACK = Color(0, 0, 0)
DOWN = Ray(Vec3(0, 5, 0), Vec3(0, -1, 0))


def floor(material):
    """A large floor at y=0 centred on the origin."""
    return PlaneY(-10, 0, -10, 20, 20, material)


class TestBackgrounds:
    def test_constant(self):
        bg = ConstantBackground(Color(0.2, 0.3, 0.4))
        assert bg.value(DOWN) == Color(0.2, 0.3, 0.4)

    def test_constant_defaults_to_black(self):
        assert ConstantBackground().value(DOWN) == BLACK

    def test_sky_gradient_endpoints(self):
        """Straight up is the top color and straight down is the bottom color."""
        sky = SkyGradient()
        up = sky.value(Ray(Vec3(), Vec3(0, 3, 0)))
        down = sky.value(Ray(Vec3(), Vec3(0, -3, 0)))
        assert up == pytest.approx((0.5, 0.7, 1.0))
        assert down == pytest.approx((1.0, 1.0, 1.0))

    def test_sky_gradient_horizon(self):
        """A horizontal ray is the midpoint of the two colors."""
        sky = SkyGradient()
        assert sky.value(Ray(Vec3(), Vec3(1, 0, 0))) == pytest.approx((0.75, 0.85, 1.0))


class TestRadiance:
    """Tests for radiance()."""

    def test_zero_depth_is_black(self, rng):
        world = HittableList()
        bg = ConstantBackground(Color(1, 1, 1))
        assert radiance(DOWN, world, 0, bg, rng) == BLACK

    def test_miss_returns_background(self, rng):
        world = HittableList()
        bg = ConstantBackground(Color(0.1, 0.2, 0.3))
        assert radiance(DOWN, world, MAX_DEPTH, bg, rng) == Color(0.1, 0.2, 0.3)

    def test_direct_emitter_hit(self, lamp, rng):
        """An emitter seen directly contributes exactly its emission."""
        world = HittableList([floor(lamp)])
        assert radiance(DOWN, world, MAX_DEPTH, ConstantBackground(), rng) == Color(4, 4, 4)

    def test_emitter_needs_one_bounce(self, lamp, rng):
        """With depth 1 the emitter is still visible."""
        world = HittableList([floor(lamp)])
        assert radiance(DOWN, world, 1, ConstantBackground(), rng) == Color(4, 4, 4)

    def test_mirror_attenuates_background(self, rng):
        """A mirror floor returns the background times its albedo."""
        world = HittableList([floor(Metal(Color(0.8, 0.6, 0.4)))])
        bg = ConstantBackground(Color(0.5, 0.5, 0.5))
        result = radiance(DOWN, world, MAX_DEPTH, bg, rng)
        assert result == pytest.approx((0.4, 0.3, 0.2))

    def test_depth_exhausted_on_scatter(self, rng):
        """A single bounce with depth 1 gathers nothing after scattering."""
        world = HittableList([floor(Metal(Color(1, 1, 1)))])
        bg = ConstantBackground(Color(1, 1, 1))
        assert radiance(DOWN, world, 1, bg, rng) == BLACK

    def test_closed_diffuse_box_is_dark(self, rng):
        """Inside a closed non-emissive sphere no light is ever found."""
        world = HittableList([Sphere(Vec3(0, 0, 0), 10.0, Lambertian(Color(0.9, 0.9, 0.9)))])
        bg = ConstantBackground(Color(1, 1, 1))
        ray = Ray(Vec3(0, 0, 0), Vec3(1, 0, 0))
        assert radiance(ray, world, 10, bg, rng) == BLACK

    def test_diffuse_under_white_sky(self, gray, rng):
        """A diffuse floor under a uniform sky reflects albedo times the sky."""
        world = HittableList([floor(gray)])
        bg = ConstantBackground(Color(1, 1, 1))
        # Every scattered ray escapes upward, so each sample is exactly 0.5
        assert radiance(DOWN, world, MAX_DEPTH, bg, rng) == pytest.approx((0.5, 0.5, 0.5))

    def test_t_min_skips_close_hits(self, lamp, rng):
        """Surfaces closer than t_min are ignored."""
        world = HittableList([floor(lamp)])
        ray = Ray(Vec3(0, T_MIN / 2.0, 0), Vec3(0, -1, 0))
        assert radiance(ray, world, MAX_DEPTH, ConstantBackground(), rng) == BLACK

    def test_results_are_finite(self, glass, rng):
        world = HittableList(
            [Sphere(Vec3(0, 0, 0), 1.0, glass), floor(Lambertian(Color(0.5, 0.5, 0.5)))]
        )
        bg = SkyGradient()
        for _ in range(50):
            result = radiance(Ray(Vec3(0, 0.5, 5), Vec3(0, 0, -1)), world, MAX_DEPTH, bg, rng)
            assert all(math.isfinite(c) and c >= 0.0 for c in result)
