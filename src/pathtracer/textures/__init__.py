"""Textures module for spatially varying surface color.

Components:
    base: The Texture interface
    solid_color: Constant color
    checker: 3-D checker pattern alternating two sub-textures
    image: Nearest-pixel lookup into an RGB raster loaded with Pillow

Every texture answers one query:
    color = texture.value(u, v, point)
"""

from .base import Texture
from .checker import CheckerTexture
from .image import ImageTexture, TextureLoadError
from .solid_color import SolidColor, as_texture

__all__ = [
    "Texture",
    "SolidColor",
    "as_texture",
    "CheckerTexture",
    "ImageTexture",
    "TextureLoadError",
]
