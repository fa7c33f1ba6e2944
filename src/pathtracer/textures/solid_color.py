"""Constant-color texture."""

from __future__ import annotations

from pathtracer.core.vec3 import Color, Vec3
from pathtracer.textures.base import Texture


class SolidColor(Texture):
    """A texture returning the same color everywhere.

    Attributes:
        color: The constant linear RGB color.
    """

    def __init__(self, color: Color) -> None:
        self.color = color

    @classmethod
    def from_rgb(cls, red: float, green: float, blue: float) -> SolidColor:
        return cls(Color(red, green, blue))

    def value(self, u: float, v: float, point: Vec3) -> Color:
        return self.color

    def __repr__(self) -> str:
        return f"SolidColor({self.color!r})"


def as_texture(value: Texture | Color) -> Texture:
    """Wrap a plain color in a SolidColor, passing textures through."""
    if isinstance(value, Texture):
        return value
    return SolidColor(Color(*value))
