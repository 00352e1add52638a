"""
2D vector math shared by every entity
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector2:
    """Immutable 2D vector"""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2:
        return Vector2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vector2:
        return self * scalar

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def dot(self, other: Vector2) -> float:
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def normalized(self, eps: float = 1e-8) -> Vector2:
        """Unit vector in the same direction, or the zero vector if too short"""
        l = self.length()
        if l < eps:
            return Vector2(0.0, 0.0)
        return Vector2(self.x / l, self.y / l)

    def rotated(self, angle: float) -> Vector2:
        """Rotate by angle (radians)"""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return Vector2(
            self.x * cos_a - self.y * sin_a,
            self.x * sin_a + self.y * cos_a,
        )

    def scaled_to(self, length: float) -> Vector2:
        return self.normalized() * length

    def as_tuple(self) -> tuple:
        return (self.x, self.y)

    @staticmethod
    def from_angle(angle: float, length: float = 1.0) -> Vector2:
        """Forward vector for a heading; 0 points up the screen (negative y)"""
        return Vector2(math.sin(angle) * length, -math.cos(angle) * length)

    @staticmethod
    def zero() -> Vector2:
        return Vector2(0.0, 0.0)
