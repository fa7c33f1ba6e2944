"""Three-dimensional checker pattern."""

from __future__ import annotations

import math

from pathtracer.core.vec3 import Color, Vec3
from pathtracer.textures.base import Texture
from pathtracer.textures.solid_color import as_texture

# Spatial frequency of the pattern (cells per 2*pi world units)
CHECKER_FREQUENCY = 10.0


class CheckerTexture(Texture):
    """Alternate between two sub-textures in a solid 3-D checker pattern.

    The pattern is driven by the sign of sin(10x) * sin(10y) * sin(10z) at the
    world-space point, so it does not depend on the surface UV coordinates.
    Negative values select the odd texture, everything else the even one.

    Attributes:
        odd: Texture used where the sine product is negative.
        even: Texture used where the sine product is zero or positive.
    """

    def __init__(self, odd: Texture | Color, even: Texture | Color) -> None:
        self.odd = as_texture(odd)
        self.even = as_texture(even)

    def value(self, u: float, v: float, point: Vec3) -> Color:
        sines = (
            math.sin(CHECKER_FREQUENCY * point[0])
            * math.sin(CHECKER_FREQUENCY * point[1])
            * math.sin(CHECKER_FREQUENCY * point[2])
        )
        if sines < 0.0:
            return self.odd.value(u, v, point)
        return self.even.value(u, v, point)

    def __repr__(self) -> str:
        return f"CheckerTexture(odd={self.odd!r}, even={self.even!r})"
