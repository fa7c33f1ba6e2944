"""Three-component vector value type.

Vec3 is used interchangeably as a point, a direction and a linear RGB color.
It is an immutable tuple subclass so instances can be shared freely between
rendering threads and used as dictionary keys.

Color components are non-negative and unclamped while radiance is being
accumulated; they are only clamped to [0, 1] when converted for output.

Example:
    >>> from pathtracer.core.vec3 import Vec3
    >>> a = Vec3(1.0, 2.0, 3.0)
    >>> b = Vec3(0.5, 0.5, 0.5)
    >>> a + b
    Vec3(1.5, 2.5, 3.5)
    >>> 2.0 * a
    Vec3(2.0, 4.0, 6.0)
    >>> a.dot(b)
    3.0
"""

from __future__ import annotations

import math
from operator import itemgetter


class Vec3(tuple):
    """An immutable 3-component floating-point vector.

    Arithmetic follows the usual vector algebra:
        - ``a + b`` and ``a - b`` are componentwise
        - ``a * s`` and ``s * a`` scale by a scalar
        - ``a * b`` with two vectors is the componentwise (Hadamard) product,
          used to attenuate colors
        - ``a / s`` divides by a scalar

    Attributes:
        x: First component (also the red channel of a color).
        y: Second component (green channel).
        z: Third component (blue channel).
    """

    __slots__ = ()

    def __new__(cls, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Vec3:
        return tuple.__new__(cls, (float(x), float(y), float(z)))

    x = property(itemgetter(0))
    y = property(itemgetter(1))
    z = property(itemgetter(2))

    @classmethod
    def zero(cls) -> Vec3:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def splat(cls, value: float) -> Vec3:
        """Create a vector with all three components equal to ``value``."""
        return cls(value, value, value)

    def __add__(self, other: Vec3) -> Vec3:  # type: ignore[override]
        return Vec3(self[0] + other[0], self[1] + other[1], self[2] + other[2])

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self[0] - other[0], self[1] - other[1], self[2] - other[2])

    def __neg__(self) -> Vec3:
        return Vec3(-self[0], -self[1], -self[2])

    def __mul__(self, other: Vec3 | float) -> Vec3:  # type: ignore[override]
        if isinstance(other, tuple):
            return Vec3(self[0] * other[0], self[1] * other[1], self[2] * other[2])
        return Vec3(self[0] * other, self[1] * other, self[2] * other)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec3:
        inv = 1.0 / scalar
        return Vec3(self[0] * inv, self[1] * inv, self[2] * inv)

    def __repr__(self) -> str:
        return f"Vec3({self[0]!r}, {self[1]!r}, {self[2]!r})"

    def dot(self, other: Vec3) -> float:
        return self[0] * other[0] + self[1] * other[1] + self[2] * other[2]

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self[1] * other[2] - self[2] * other[1],
            self[2] * other[0] - self[0] * other[2],
            self[0] * other[1] - self[1] * other[0],
        )

    def length_squared(self) -> float:
        return self[0] * self[0] + self[1] * self[1] + self[2] * self[2]

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def unit(self) -> Vec3:
        """Return the vector scaled to unit length.

        A zero-length vector is returned unchanged rather than producing NaNs.
        """
        length = self.length()
        if length == 0.0:
            return self
        return self / length

    def near_zero(self, eps: float = 1e-8) -> bool:
        """Check whether every component is smaller than ``eps`` in magnitude."""
        return abs(self[0]) < eps and abs(self[1]) < eps and abs(self[2]) < eps


# Colors share the vector representation
Color = Vec3
