"""Immutable three-dimensional vectors."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True, slots=True)
class Vector3:
    """A point or direction in 3D space."""

    x: float
    y: float
    z: float

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __add__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, c: float) -> Vector3:
        if isinstance(c, Vector3):
            return NotImplemented
        return Vector3(self.x * c, self.y * c, self.z * c)

    __rmul__ = __mul__

    def __truediv__(self, c: float) -> Vector3:
        if isinstance(c, Vector3):
            return NotImplemented
        return Vector3(self.x / c, self.y / c, self.z / c)

    def dot(self, other: Vector3) -> float:
        """Scalar product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        """Vector product with another vector."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        """Squared Euclidean length."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.length_squared())

    def normalized(self) -> Vector3:
        """Unit vector in the same direction; raises ZeroDivisionError for a zero vector."""
        return self / self.length()

    def projection(self, other: Vector3) -> Vector3:
        """Projection of this vector onto ``other``."""
        return other * (self.dot(other) / other.length_squared())

    def squared_distance_to(self, other: Vector3) -> float:
        """Squared distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return dx * dx + dy * dy + dz * dz

    def distance_to(self, other: Vector3) -> float:
        """Distance to another point."""
        return (self - other).length()

    def __str__(self) -> str:
        return f"({self.x},{self.y},{self.z})"