"""Vector and point value types for host-side geometry.

Vector is a displacement and Point is a position. They share a representation
but are distinct types, and only the algebraically meaningful operators are
defined between them:

    Point - Point   -> Vector
    Point + Vector  -> Point
    Point - Vector  -> Point
    Vector +- Vector -> Vector

Point + Point (and Vector + Point) is not defined and raises TypeError.

Both types are immutable. Augmented assignment (``v += w``) rebinds the name
to a new value.

Example:
    >>> from src.raysphere.core.vector import Point, Vector, unit_vector
    >>> p = Point(0.0, 0.0, 0.0) + Vector(1.0, 2.0, 2.0)
    >>> (p - Point(0.0, 0.0, 0.0)).length()
    3.0
    >>> unit_vector(Vector(0.0, 3.0, 4.0))
    Vector(x=0.0, y=0.6, z=0.8)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from src.raysphere.core.numeric import newton_sqrt


@dataclass(frozen=True)
class Vector:
    """A 3D displacement with double precision components.

    Attributes:
        x: The x component.
        y: The y component.
        z: The z component.
    """

    x: float
    y: float
    z: float

    def __add__(self, other: object) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: object) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def __mul__(self, other: object) -> Vector:
        # Component-wise product for vectors, scaling for numbers
        if isinstance(other, Vector):
            return Vector(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, (int, float)):
            return Vector(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other: object) -> Vector:
        if isinstance(other, (int, float)):
            return Vector(other * self.x, other * self.y, other * self.z)
        return NotImplemented

    def __truediv__(self, other: object) -> Vector:
        if not isinstance(other, (int, float)):
            return NotImplemented
        return Vector(self.x / other, self.y / other, self.z / other)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def dot(self, other: Vector) -> float:
        """Compute the dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length_squared(self) -> float:
        """Compute the squared length (avoids the square root)."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        """Compute the Euclidean length."""
        return newton_sqrt(self.length_squared())

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class Point:
    """A 3D position with double precision coordinates.

    Attributes:
        x: The x coordinate.
        y: The y coordinate.
        z: The z coordinate.
    """

    x: float
    y: float
    z: float

    def __add__(self, other: object) -> Point:
        if not isinstance(other, Vector):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: object) -> Point | Vector:
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Vector):
            return Point(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


def dot(u: Vector, v: Vector) -> float:
    """Compute the dot product u . v."""
    return u.dot(v)


def unit_vector(v: Vector) -> Vector:
    """Scale a vector to unit length.

    The zero vector is not guarded against: dividing by its zero length
    raises ZeroDivisionError.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
    """
    return v / v.length()
