"""Vector type used for both directions and points.

This module defines the 3D vector shared by every other module:
- Vector: An immutable (x, y, z) triple
- FLOAT_PRECISION: Default tolerance for coordinate comparisons
"""

import math
from dataclasses import dataclass
from typing import Any

FLOAT_PRECISION = 0.001


def nearly_equal(a: float, b: float, precision: float = FLOAT_PRECISION) -> bool:
    """Check if two numbers are equal up to ``precision``.

    Args:
        a: First number
        b: Second number
        precision: Maximum accepted difference

    Returns:
        True if ``|a - b| <= precision``
    """
    return abs(b - a) <= precision


@dataclass(frozen=True, slots=True)
class Vector:
    """A vector in 3D space. Also used to store simple points.

    Immutable and hashable. Equality with ``==`` is exact; use
    :meth:`equals` to compare positions computed through several transforms.

    Attributes:
        x: X coordinate
        y: Y coordinate
        z: Z coordinate (height, negative below the stock surface)
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_points(cls, a: "Vector", b: "Vector") -> "Vector":
        """Create the vector going from point ``a`` to point ``b``."""
        return cls(b.x - a.x, b.y - a.y, b.z - a.z)

    def equals(self, other: "Vector", precision: float = FLOAT_PRECISION) -> bool:
        """Check if two vectors are at the same position.

        Args:
            other: The other vector
            precision: Tolerance applied on each coordinate

        Returns:
            True if every coordinate is within ``precision``
        """
        return (
            nearly_equal(self.x, other.x, precision)
            and nearly_equal(self.y, other.y, precision)
            and nearly_equal(self.z, other.z, precision)
        )

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalized(self) -> "Vector":
        """Return the unit vector with the same direction.

        The zero vector is returned unchanged.
        """
        length = self.length()
        if length == 0:
            return self
        return Vector(self.x / length, self.y / length, self.z / length)

    def with_z(self, z: float) -> "Vector":
        """Return a copy of the vector at height ``z``."""
        return Vector(self.x, self.y, z)

    def to_2d(self) -> "Vector":
        """Return a copy of the vector projected on the XY plane."""
        return Vector(self.x, self.y, 0.0)

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> "Vector":
        return Vector(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> "Vector":
        return Vector(self.x / divisor, self.y / divisor, self.z / divisor)

    def to_tuple(self) -> tuple[float, float, float]:
        """Convert to simple (x, y, z) tuple."""
        return (self.x, self.y, self.z)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"x": self.x, "y": self.y, "z": self.z}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Vector":
        """Deserialize from dictionary. Missing coordinates default to 0."""
        return cls(
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            z=float(data.get("z", 0.0)),
        )


def scalar(a: Vector, b: Vector) -> float:
    """Return the scalar (dot) product of two vectors."""
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vector, b: Vector) -> Vector:
    """Return the cross product of two vectors."""
    return Vector(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )
