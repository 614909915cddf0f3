"""
Geometry package for scanner registration.

Integer vector algebra and the 24-element axis-aligned rotation group.

Modules:
- vectors: Point, Displacement, Dim
- rotations: Swap, Reflect, Rotation and difference inference

Usage:
    from scanner_registration.common.geometry import (
        Point,
        Rotation,
        rotate,
        rot_diff,
    )
"""

from __future__ import annotations

from scanner_registration.common.geometry.vectors import Dim, Displacement, Point
from scanner_registration.common.geometry.rotations import (
    CANONICAL_SWAPS,
    Reflect,
    Rotation,
    Swap,
    all_rotations,
    refl_diff,
    reflect,
    rot_diff,
    rotate,
    swap,
    swap_diff,
    unrotate,
    unswap,
    valid_rotations,
)

__all__ = [
    # Vectors
    "Dim",
    "Displacement",
    "Point",
    # Rotation group
    "CANONICAL_SWAPS",
    "Reflect",
    "Rotation",
    "Swap",
    "all_rotations",
    "valid_rotations",
    # Apply / invert
    "swap",
    "unswap",
    "reflect",
    "rotate",
    "unrotate",
    # Difference inference
    "swap_diff",
    "refl_diff",
    "rot_diff",
]
