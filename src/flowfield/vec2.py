"""Immutable 2D vector used for both coordinate space and pixel space."""

import math
from dataclasses import dataclass
from typing import Iterator

from .errors import DegenerateGeometryError


@dataclass(frozen=True, slots=True)
class Vec2:
    """Pair of floats with value semantics.

    Arithmetic is componentwise. Augmented operators (``+=``, ``*=``)
    rebind the name to a new instance.
    """

    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vec2":
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> "Vec2":
        return self * scalar

    def __truediv__(self, scalar: float) -> "Vec2":
        return Vec2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)

    def dot(self, other: "Vec2") -> float:
        return self.x * other.x + self.y * other.y

    def norm(self) -> float:
        return math.sqrt(self.dot(self))

    def dist(self, other: "Vec2") -> float:
        """Euclidean distance to ``other``."""
        return (self - other).norm()

    def normalize(self) -> "Vec2":
        """Unit vector in the same direction.

        Raises
        ------
        DegenerateGeometryError
            If the vector has zero length.
        """
        n = self.norm()
        if n == 0.0:
            raise DegenerateGeometryError(f"Cannot normalize zero vector {self}")
        return self / n

    def lerp(self, other: "Vec2", t: float) -> "Vec2":
        """Linear interpolation, ``t=0`` gives self and ``t=1`` gives other."""
        return self * (1.0 - t) + other * t
