"""
Axis-aligned rotation group without trigonometry.

A rotation is an axis permutation (Swap) followed by per-axis sign flips
(Reflect). Of the 6 x 8 = 48 combinations, exactly the 24 with even
(permutation parity + reflection count) are proper rotations; the rest are
mirror images and never describe a physical scanner orientation.

Conventions:
    swap:     Swap.twice(a, b, c) swaps (a, b) then (b, c), a 3-cycle.
    rotate:   swap, then reflect.
    unrotate: reflect, then unswap (transpositions in reverse order).

Difference inference (rot_diff) recovers the rotation relating two vectors
of equal length by matching components up to sign. When two components of a
vector tie in magnitude only one permutation is returned; callers must treat
the result as a hypothesis (see backend.registration).
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Iterator, List, Tuple

from scanner_registration.common.geometry.vectors import Dim, Point


# =============================================================================
# Swap (axis permutation)
# =============================================================================


@dataclass(frozen=True)
class Swap:
    """
    Axis permutation as a sequence of named axes.

    dims has length 0 (no permutation), 2 (one transposition) or 3
    (two successive transpositions). Use the constructors rather than
    building dims by hand.
    """
    dims: Tuple[Dim, ...] = ()

    def __post_init__(self) -> None:
        if len(self.dims) not in (0, 2, 3):
            raise ValueError(f"Swap takes 0, 2 or 3 axes, got {len(self.dims)}")
        if len(set(self.dims)) != len(self.dims):
            raise ValueError(f"Swap axes must be distinct, got {self.dims}")

    @classmethod
    def none(cls) -> "Swap":
        return cls(())

    @classmethod
    def once(cls, a: Dim, b: Dim) -> "Swap":
        return cls((a, b))

    @classmethod
    def twice(cls, a: Dim, b: Dim, c: Dim) -> "Swap":
        return cls((a, b, c))

    @property
    def total(self) -> int:
        """Number of transpositions (permutation parity count)."""
        return max(len(self.dims) - 1, 0)

    def transpositions(self) -> List[Tuple[Dim, Dim]]:
        return [(self.dims[i], self.dims[i + 1]) for i in range(self.total)]

    def __str__(self) -> str:
        if not self.dims:
            return "none"
        return "<>".join(str(d) for d in self.dims)


# =============================================================================
# Reflect (sign flips)
# =============================================================================


@dataclass(frozen=True)
class Reflect:
    """Per-axis sign flags."""
    x: bool = False
    y: bool = False
    z: bool = False

    @classmethod
    def along(cls, dim: Dim) -> "Reflect":
        return cls(x=dim is Dim.X, y=dim is Dim.Y, z=dim is Dim.Z)

    @property
    def total(self) -> int:
        return int(self.x) + int(self.y) + int(self.z)

    def flags(self) -> Tuple[bool, bool, bool]:
        return (self.x, self.y, self.z)

    def __str__(self) -> str:
        return "".join("-" if f else "+" for f in self.flags())


# =============================================================================
# Rotation
# =============================================================================


@dataclass(frozen=True)
class Rotation:
    """(Swap, Reflect) pair; a proper rotation iff is_valid()."""
    swap: Swap = Swap()
    reflect: Reflect = Reflect()

    @classmethod
    def identity(cls) -> "Rotation":
        return cls(Swap.none(), Reflect())

    def is_valid(self) -> bool:
        return (self.swap.total + self.reflect.total) % 2 == 0

    def __str__(self) -> str:
        return f"{self.swap} {self.reflect}"


# =============================================================================
# Apply / invert
# =============================================================================


def swap(point: Point, s: Swap) -> Point:
    coords = list(point.as_tuple())
    for a, b in s.transpositions():
        coords[a], coords[b] = coords[b], coords[a]
    return Point(*coords)


def unswap(point: Point, s: Swap) -> Point:
    # Permutations do not commute: undo the transpositions last-first.
    coords = list(point.as_tuple())
    for a, b in reversed(s.transpositions()):
        coords[a], coords[b] = coords[b], coords[a]
    return Point(*coords)


def reflect(point: Point, r: Reflect) -> Point:
    """Negate every flagged axis. Self-inverse."""
    return Point(*(-c if f else c for c, f in zip(point.as_tuple(), r.flags())))


def rotate(point: Point, rot: Rotation) -> Point:
    return reflect(swap(point, rot.swap), rot.reflect)


def unrotate(point: Point, rot: Rotation) -> Point:
    return unswap(reflect(point, rot.reflect), rot.swap)


# =============================================================================
# Difference inference
# =============================================================================


def _abs_eq(lhs: int, rhs: int) -> bool:
    return lhs == rhs or lhs + rhs == 0


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


def swap_diff(a: Point, b: Point) -> Swap:
    """
    Find the Swap that turns `a` into `b` up to sign.

    Assumes |a| == |b| and that some rotation relates them. If two components
    tie in magnitude, only one of the possible permutations is returned.
    """
    if _abs_eq(a.x, b.x):
        if _abs_eq(a.y, b.y) and _abs_eq(a.z, b.z):
            return Swap.none()
        return Swap.once(Dim.Y, Dim.Z)
    if _abs_eq(a.y, b.y):
        return Swap.once(Dim.X, Dim.Z)
    if _abs_eq(a.z, b.z):
        return Swap.once(Dim.X, Dim.Y)
    if _abs_eq(a.x, b.z):
        return Swap.twice(Dim.X, Dim.Y, Dim.Z)
    return Swap.twice(Dim.Z, Dim.Y, Dim.X)


def refl_diff(a: Point, b: Point) -> Reflect:
    """
    Find which axes differ in sign between `a` and `b`.

    Assumes the points are already matched in permutation. A zero component
    is reported as not reflected.
    """
    return Reflect(
        x=_sign(a.x) != _sign(b.x),
        y=_sign(a.y) != _sign(b.y),
        z=_sign(a.z) != _sign(b.z),
    )


def rot_diff(a: Point, b: Point) -> Rotation:
    """Candidate Rotation turning `a` into `b`. May be invalid; check is_valid()."""
    s = swap_diff(a, b)
    return Rotation(s, refl_diff(swap(a, s), b))


# =============================================================================
# Enumeration
# =============================================================================


CANONICAL_SWAPS: Tuple[Swap, ...] = (
    Swap.none(),
    Swap.once(Dim.X, Dim.Y),
    Swap.once(Dim.X, Dim.Z),
    Swap.once(Dim.Y, Dim.Z),
    Swap.twice(Dim.X, Dim.Y, Dim.Z),
    Swap.twice(Dim.Z, Dim.Y, Dim.X),
)


def all_rotations() -> Iterator[Rotation]:
    """All 48 (Swap, Reflect) combinations, proper or not."""
    for s in CANONICAL_SWAPS:
        for flags in itertools.product((False, True), repeat=3):
            yield Rotation(s, Reflect(*flags))


def valid_rotations() -> Iterator[Rotation]:
    """The 24 proper rotations."""
    return (rot for rot in all_rotations() if rot.is_valid())
