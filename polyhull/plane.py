"""Planes, rays and triangle normals."""

from __future__ import annotations

from dataclasses import dataclass, field

from .vector3 import Vector3

_ZERO = Vector3(0.0, 0.0, 0.0)


class Plane:
    """Plane given by a normal and any point on it.

    ``d`` is the signed distance from the origin when the normal has unit
    length; ``sqr_n_length`` caches the squared length of the normal.
    """

    __slots__ = ("normal", "d", "sqr_n_length")

    def __init__(self, normal: Vector3 = _ZERO, point: Vector3 = _ZERO) -> None:
        self.normal = normal
        self.d = -normal.dot(point)
        self.sqr_n_length = normal.length_squared()

    def signed_distance(self, q: Vector3) -> float:
        """Signed distance of ``q``, scaled by the normal's length."""
        return self.normal.dot(q) + self.d

    def is_point_on_positive_side(self, q: Vector3) -> bool:
        """True if ``q`` lies on the plane or on the side the normal points to."""
        return self.signed_distance(q) >= 0

    def __repr__(self) -> str:
        return f"Plane(normal={self.normal!r}, d={self.d!r})"


@dataclass(frozen=True)
class Ray:
    """Infinite line through ``start`` along ``direction``."""

    start: Vector3
    direction: Vector3
    inv_length_squared: float = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "inv_length_squared", 1 / self.direction.length_squared())

    def squared_distance_to_point(self, p: Vector3) -> float:
        """Squared distance from ``p`` to the line."""
        s = p - self.start
        t = s.dot(self.direction)
        return s.length_squared() - t * t * self.inv_length_squared


def triangle_normal(a: Vector3, b: Vector3, c: Vector3) -> Vector3:
    """Unnormalised normal of triangle ``abc``: ``(a - c) x (b - c)``."""
    return (a - c).cross(b - c)