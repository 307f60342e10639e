"""Normalized 2D field geometry.

Positions live in the unit square: (0, 0) is the top-left corner of the play
area, +X runs right and +Y runs down. Angles are radians from +X, so pi/2
points straight down the screen.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vec2:
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vec2:
        """Unit vector in the same direction; the zero vector stays zero."""
        length = self.length()
        if length < 1e-9:
            return Vec2(0.0, 0.0)
        return Vec2(self.x / length, self.y / length)

    def is_zero(self) -> bool:
        return self.length() < 1e-9

    def lerp(self, other: Vec2, t: float) -> Vec2:
        return Vec2(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def angle(self) -> float:
        return math.atan2(self.y, self.x)

    @staticmethod
    def from_angle(radians: float) -> Vec2:
        return Vec2(math.cos(radians), math.sin(radians))

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


def cosine_similarity(a: Vec2, b: Vec2) -> float:
    """Dot product of the two unit vectors, 0.0 when either is degenerate."""
    if a.is_zero() or b.is_zero():
        return 0.0
    return a.normalized().dot(b.normalized())
