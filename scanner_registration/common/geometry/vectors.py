"""
Integer 3-vector algebra for beacon coordinates.

Point: a beacon position in some scanner frame.
Displacement: the difference of two Points; translates Points.
Dim: symbolic axis index.

All operations are exact integer arithmetic and total (no error conditions).
Python ints do not overflow, so squared distances never need a wider type.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple


class Dim(IntEnum):
    """Axis selector. The ordinal indexes (x, y, z)."""
    X = 0
    Y = 1
    Z = 2

    def __str__(self) -> str:
        return self.name


# =============================================================================
# Displacement
# =============================================================================


@dataclass(frozen=True)
class Displacement:
    """Point-to-point difference."""
    x: int = 0
    y: int = 0
    z: int = 0

    def __add__(self, other: "Displacement") -> "Displacement":
        if not isinstance(other, Displacement):
            return NotImplemented
        return Displacement(self.x + other.x, self.y + other.y, self.z + other.z)

    def __neg__(self) -> "Displacement":
        return Displacement(-self.x, -self.y, -self.z)

    def __sub__(self, other: "Displacement") -> "Displacement":
        if not isinstance(other, Displacement):
            return NotImplemented
        return self + (-other)

    def __str__(self) -> str:
        return f"{self.x},{self.y},{self.z}"

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.x, self.y, self.z)

    def taxicab(self) -> int:
        """L1 length."""
        return abs(self.x) + abs(self.y) + abs(self.z)


# =============================================================================
# Point
# =============================================================================


@dataclass(frozen=True)
class Point:
    """Beacon coordinate in one scanner frame."""
    x: int = 0
    y: int = 0
    z: int = 0

    @classmethod
    def origin(cls) -> "Point":
        return cls(0, 0, 0)

    @classmethod
    def from_displacement(cls, dsp: Displacement) -> "Point":
        """The point reached by moving `dsp` away from the origin."""
        return cls(dsp.x, dsp.y, dsp.z)

    @classmethod
    def from_components(cls, components) -> "Point":
        x, y, z = components
        return cls(int(x), int(y), int(z))

    def __sub__(self, other: "Point") -> Displacement:
        if not isinstance(other, Point):
            return NotImplemented
        return Displacement(self.x - other.x, self.y - other.y, self.z - other.z)

    def __add__(self, dsp: Displacement) -> "Point":
        if not isinstance(dsp, Displacement):
            return NotImplemented
        return Point(self.x + dsp.x, self.y + dsp.y, self.z + dsp.z)

    def __str__(self) -> str:
        return f"{self.x},{self.y},{self.z}"

    def get(self, dim: Dim) -> int:
        return self.as_tuple()[dim]

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.x, self.y, self.z)

    def dist_squclid(self, other: "Point") -> int:
        """Squared euclidean distance between `self` and `other`."""
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return dx * dx + dy * dy + dz * dz

    def abs_squclid(self) -> int:
        """Squared euclidean distance from the origin."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def dist_taxicab(self, other: "Point") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y) + abs(self.z - other.z)

    def abs_taxicab(self) -> int:
        """Taxicab distance from the origin."""
        return abs(self.x) + abs(self.y) + abs(self.z)
