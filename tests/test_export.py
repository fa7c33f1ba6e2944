"""Unit tests for image export.

Tests cover:
- Quantising single colors with range checking
- Converting float buffers to uint8 (clamped and strict)
- Writing PNG (via Pillow) and plain-text PPM files
- RMSE between images
"""

import math

import numpy as np
import pytest
from PIL import Image as PILImage

from pathtracer.preview.export import (
    ColorRangeError,
    color_to_rgb8,
    compute_rmse,
    image_to_uint8,
    save_png,
    save_ppm,
)


class TestColorToRgb8:
    def test_quantise(self):
        assert color_to_rgb8((0.0, 0.5, 1.0)) == (0, 127, 255)

    @pytest.mark.parametrize("bad", [(1.5, 0.0, 0.0), (0.0, -0.1, 0.0), (0.0, 0.0, math.nan)])
    def test_out_of_range(self, bad):
        with pytest.raises(ColorRangeError):
            color_to_rgb8(bad)

    def test_error_is_value_error(self):
        assert issubclass(ColorRangeError, ValueError)


class TestImageToUint8:
    def test_clamps_by_default(self):
        image = np.array([[[2.0, -1.0, math.nan]]])
        np.testing.assert_array_equal(image_to_uint8(image), [[[255, 0, 0]]])

    def test_strict_mode_raises(self):
        with pytest.raises(ColorRangeError):
            image_to_uint8(np.full((1, 1, 3), 1.01), clamp=False)

    def test_strict_mode_accepts_valid(self):
        out = image_to_uint8(np.full((2, 2, 3), 1.0), clamp=False)
        assert out.dtype == np.uint8
        assert (out == 255).all()


class TestSave:
    def test_png(self, tmp_path):
        image = np.zeros((2, 3, 3))
        image[0, 0] = (1.0, 0.0, 0.0)
        image[1, 2] = (0.0, 0.0, 1.0)
        path = tmp_path / "out.png"

        save_png(image, path)

        with PILImage.open(path) as loaded:
            assert loaded.size == (3, 2)
            pixels = np.asarray(loaded.convert("RGB"))
        assert tuple(pixels[0, 0]) == (255, 0, 0)
        assert tuple(pixels[1, 2]) == (0, 0, 255)

    def test_ppm_format(self, tmp_path):
        image = np.array(
            [
                [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]],
                [[0.0, 0.0, 1.0], [0.5, 0.5, 0.5]],
            ]
        )
        path = tmp_path / "out.ppm"

        save_ppm(image, path)

        assert path.read_text(encoding="ascii").splitlines() == [
            "P3",
            "2 2",
            "255",
            "255 0 0",
            "0 255 0",
            "0 0 255",
            "127 127 127",
        ]

    def test_ppm_clamps(self, tmp_path):
        path = tmp_path / "bright.ppm"
        save_ppm(np.full((1, 1, 3), 3.0), path)
        assert path.read_text(encoding="ascii").splitlines()[-1] == "255 255 255"

    def test_ppm_strict(self, tmp_path):
        with pytest.raises(ColorRangeError):
            save_ppm(np.full((1, 1, 3), 3.0), tmp_path / "bright.ppm", clamp=False)


class TestComputeRmse:
    def test_identical(self):
        image = np.random.default_rng(0).random((4, 4, 3))
        assert compute_rmse(image, image) == 0.0

    def test_constant_offset(self):
        a = np.zeros((2, 2, 3))
        assert compute_rmse(a, a + 0.25) == pytest.approx(0.25)

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            compute_rmse(np.zeros((2, 2, 3)), np.zeros((2, 3, 3)))
