"""Texture interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pathtracer.core.vec3 import Color, Vec3


class Texture(ABC):
    """A color-valued function over surface coordinates and world position."""

    @abstractmethod
    def value(self, u: float, v: float, point: Vec3) -> Color:
        """Evaluate the texture.

        Args:
            u: First surface texture coordinate.
            v: Second surface texture coordinate.
            point: The world-space point being shaded.

        Returns:
            The linear RGB color at the given coordinates.
        """
