"""Image-mapped texture backed by an RGB raster.

The raster is stored as a numpy array of shape (height, width, 3) with 8-bit
channels. Lookup is nearest-pixel: UV coordinates are clamped to [0, 1], V is
flipped so that v = 1 maps to the top row, and the byte values are scaled by
1/255 into linear color.

Example:
    >>> from pathtracer.textures.image import ImageTexture
    >>> earth = ImageTexture.load("assets/earthmap.jpg")
    >>> earth.value(0.5, 0.5, point)
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from pathtracer.core.vec3 import Color, Vec3
from pathtracer.textures.base import Texture

logger = logging.getLogger(__name__)

# Returned when the raster is empty so the mistake is visible in renders
MISSING_TEXTURE_COLOR = Color(0.0, 1.0, 1.0)

COLOR_SCALE = 1.0 / 255.0


class TextureLoadError(OSError):
    """Raised when an image file cannot be opened or decoded."""


class ImageTexture(Texture):
    """Texture sampling an RGB raster at the surface UV coordinates.

    Attributes:
        pixels: uint8 array of shape (height, width, 3), row 0 at the top.
    """

    def __init__(self, pixels: npt.NDArray[np.uint8]) -> None:
        pixels = np.asarray(pixels, dtype=np.uint8)
        if pixels.size and (pixels.ndim != 3 or pixels.shape[2] != 3):
            raise ValueError(f"Expected an (H, W, 3) raster, got shape {pixels.shape}")
        self.pixels = pixels

    @classmethod
    def load(cls, path: str | Path) -> ImageTexture:
        """Decode an image file into an RGB texture.

        Args:
            path: Path to any image format Pillow can read.

        Returns:
            The loaded texture.

        Raises:
            TextureLoadError: If the file is missing or cannot be decoded.
        """
        try:
            with PILImage.open(path) as image:
                pixels = np.asarray(image.convert("RGB"), dtype=np.uint8)
        except (OSError, ValueError) as exc:
            raise TextureLoadError(f"Could not load texture image {path}: {exc}") from exc

        logger.info("Loaded texture %s (%dx%d)", path, pixels.shape[1], pixels.shape[0])
        return cls(pixels)

    @property
    def width(self) -> int:
        return self.pixels.shape[1] if self.pixels.size else 0

    @property
    def height(self) -> int:
        return self.pixels.shape[0] if self.pixels.size else 0

    def value(self, u: float, v: float, point: Vec3) -> Color:
        if not self.pixels.size:
            return MISSING_TEXTURE_COLOR

        u = min(max(u, 0.0), 1.0)
        v = 1.0 - min(max(v, 0.0), 1.0)

        i = min(int(u * self.width), self.width - 1)
        j = min(int(v * self.height), self.height - 1)

        r, g, b = self.pixels[j, i]
        return Color(r * COLOR_SCALE, g * COLOR_SCALE, b * COLOR_SCALE)

    def __repr__(self) -> str:
        return f"ImageTexture({self.width}x{self.height})"
