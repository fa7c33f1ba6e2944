"""Unit tests for textures.

Tests cover:
- Solid colors
- Checker pattern parity and nesting
- Image lookup (clamping, V flip, nearest pixel, 1/255 scaling)
- Image loading through Pillow and load failures
"""

import math

import numpy as np
import pytest
from PIL import Image as PILImage

from pathtracer.core.vec3 import Color, Vec3
from pathtracer.textures.checker import CheckerTexture
from pathtracer.textures.image import MISSING_TEXTURE_COLOR, ImageTexture, TextureLoadError
from pathtracer.textures.solid_color import SolidColor, as_texture

RED = Color(1, 0, 0)
BLUE = Color(0, 0, 1)


@pytest.fixture
def two_by_two():
    """A 2x2 raster: red, green on the top row; blue, white on the bottom row."""
    pixels = np.array(
        [
            [[255, 0, 0], [0, 255, 0]],
            [[0, 0, 255], [255, 255, 255]],
        ],
        dtype=np.uint8,
    )
    return ImageTexture(pixels)


class TestSolidColor:
    """Tests for SolidColor."""

    def test_constant_everywhere(self):
        """The same color is returned for any coordinates."""
        texture = SolidColor(Color(0.2, 0.4, 0.6))
        assert texture.value(0.0, 0.0, Vec3(0, 0, 0)) == Color(0.2, 0.4, 0.6)
        assert texture.value(0.9, 0.1, Vec3(5, -3, 2)) == Color(0.2, 0.4, 0.6)

    def test_from_rgb(self):
        """from_rgb builds the color from components."""
        assert SolidColor.from_rgb(0.1, 0.2, 0.3).color == Color(0.1, 0.2, 0.3)

    def test_as_texture(self):
        """Colors are wrapped and textures pass through."""
        texture = SolidColor(RED)
        assert as_texture(texture) is texture
        wrapped = as_texture((0.5, 0.5, 0.5))
        assert isinstance(wrapped, SolidColor)
        assert wrapped.color == Color(0.5, 0.5, 0.5)


class TestCheckerTexture:
    """Tests for CheckerTexture."""

    def test_sign_of_sine_product(self):
        """Negative sine products select odd, others select even."""
        checker = CheckerTexture(RED, BLUE)
        step = math.pi / 20.0  # sin(10 * step) == 1
        assert checker.value(0, 0, Vec3(step, step, step)) == BLUE
        assert checker.value(0, 0, Vec3(-step, step, step)) == RED
        assert checker.value(0, 0, Vec3(-step, -step, step)) == BLUE

    def test_zero_product_is_even(self):
        """Points on a cell boundary are even."""
        checker = CheckerTexture(RED, BLUE)
        assert checker.value(0, 0, Vec3(0, 0.3, 0.3)) == BLUE

    def test_ignores_uv(self):
        """The pattern is solid: UV coordinates have no effect."""
        checker = CheckerTexture(RED, BLUE)
        p = Vec3(-0.1, 0.1, 0.1)
        assert checker.value(0.0, 0.0, p) == checker.value(0.7, 0.3, p)

    def test_nested_textures(self):
        """Sub-textures can themselves be checkers."""
        inner = CheckerTexture(RED, BLUE)
        outer = CheckerTexture(inner, SolidColor(Color(0, 1, 0)))
        step = math.pi / 20.0
        # Odd cell of the outer checker defers to the inner one (also odd)
        assert outer.value(0, 0, Vec3(-step, step, step)) == RED


class TestImageTexture:
    """Tests for ImageTexture lookups."""

    def test_corners(self, two_by_two):
        """v=1 is the top row and u=0 the left column."""
        p = Vec3()
        assert two_by_two.value(0.0, 1.0, p) == pytest.approx(Color(1, 0, 0))
        assert two_by_two.value(1.0, 1.0, p) == pytest.approx(Color(0, 1, 0))
        assert two_by_two.value(0.0, 0.0, p) == pytest.approx(Color(0, 0, 1))
        assert two_by_two.value(1.0, 0.0, p) == pytest.approx(Color(1, 1, 1))

    def test_clamps_out_of_range(self, two_by_two):
        """UV outside [0, 1] is clamped to the border."""
        p = Vec3()
        assert two_by_two.value(-3.0, 7.0, p) == pytest.approx(Color(1, 0, 0))
        assert two_by_two.value(2.0, -1.0, p) == pytest.approx(Color(1, 1, 1))

    def test_scales_bytes(self):
        """Channels are divided by 255."""
        texture = ImageTexture(np.full((1, 1, 3), 51, dtype=np.uint8))
        color = texture.value(0.5, 0.5, Vec3())
        assert color == pytest.approx((0.2, 0.2, 0.2))

    def test_empty_raster_is_cyan(self):
        """An empty raster evaluates to the debug color."""
        texture = ImageTexture(np.zeros((0, 0, 3), dtype=np.uint8))
        assert texture.value(0.5, 0.5, Vec3()) == MISSING_TEXTURE_COLOR == Color(0, 1, 1)

    def test_rejects_wrong_shape(self):
        """Rasters must have three channels."""
        with pytest.raises(ValueError):
            ImageTexture(np.zeros((2, 2, 4), dtype=np.uint8))


class TestImageLoading:
    """Tests for ImageTexture.load."""

    def test_load_png(self, tmp_path, two_by_two):
        """A PNG written by Pillow loads back with the same pixels."""
        path = tmp_path / "tiny.png"
        PILImage.fromarray(two_by_two.pixels).save(path)

        texture = ImageTexture.load(path)
        assert texture.width == 2
        assert texture.height == 2
        np.testing.assert_array_equal(texture.pixels, two_by_two.pixels)

    def test_grayscale_converted_to_rgb(self, tmp_path):
        """Non-RGB images are converted on load."""
        path = tmp_path / "gray.png"
        PILImage.fromarray(np.full((3, 4), 128, dtype=np.uint8)).save(path)

        texture = ImageTexture.load(path)
        assert texture.pixels.shape == (3, 4, 3)

    def test_missing_file(self, tmp_path):
        """A missing file raises TextureLoadError chained to the cause."""
        with pytest.raises(TextureLoadError) as excinfo:
            ImageTexture.load(tmp_path / "does_not_exist.jpg")
        assert excinfo.value.__cause__ is not None

    def test_not_an_image(self, tmp_path):
        """Undecodable data raises TextureLoadError."""
        path = tmp_path / "junk.png"
        path.write_bytes(b"definitely not an image")
        with pytest.raises(TextureLoadError):
            ImageTexture.load(path)

    def test_error_is_os_error(self):
        """TextureLoadError can be caught as OSError."""
        assert issubclass(TextureLoadError, OSError)
