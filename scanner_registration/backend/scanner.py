"""
Scanner: an ordered beacon cloud expressed in a single coordinate frame.

A scanner starts in its own local frame and is mutated in place (rotate, then
translate) as it is folded into the global frame. Beacon order is stable
across rotate/translate; distances_from() relies on it.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List

import numpy as np

from scanner_registration.common.geometry import Displacement, Point, Rotation, rotate


class Scanner:
    """Ordered collection of beacons in one frame."""

    def __init__(self, beacons: Iterable[Point] = ()) -> None:
        self.beacons: List[Point] = list(beacons)

    def __len__(self) -> int:
        return len(self.beacons)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.beacons)

    def __repr__(self) -> str:
        return f"Scanner({len(self.beacons)} beacons)"

    def __str__(self) -> str:
        lines = ["--- scanner ---"]
        lines.extend(str(beacon) for beacon in self.beacons)
        return "\n".join(lines) + "\n"

    def __iadd__(self, dsp: Displacement) -> "Scanner":
        self.translate(dsp)
        return self

    def copy(self) -> "Scanner":
        return Scanner(self.beacons)

    def as_array(self) -> np.ndarray:
        """Beacons as an (N, 3) int64 array, in beacon order."""
        if not self.beacons:
            return np.empty((0, 3), dtype=np.int64)
        return np.array([b.as_tuple() for b in self.beacons], dtype=np.int64)

    def rotate(self, rot: Rotation) -> None:
        """Apply `rot` to every beacon in place."""
        self.beacons = [rotate(b, rot) for b in self.beacons]

    def translate(self, dsp: Displacement) -> None:
        """Add `dsp` to every beacon in place."""
        self.beacons = [b + dsp for b in self.beacons]

    def distances_from(self, center: Point) -> np.ndarray:
        """
        Squared euclidean distance from `center` to every beacon.

        Entries are in the same order as self.beacons.
        """
        if not self.beacons:
            return np.empty((0,), dtype=np.int64)
        delta = self.as_array() - np.asarray(center.as_tuple(), dtype=np.int64)
        return np.einsum("ni,ni->n", delta, delta)

    def distance_matrix(self) -> np.ndarray:
        """(N, N) squared distances; row i equals distances_from(beacons[i])."""
        pts = self.as_array()
        delta = pts[:, None, :] - pts[None, :, :]
        return np.einsum("ijk,ijk->ij", delta, delta)

    def extend(self, other: "Scanner") -> None:
        """
        Absorb `other`'s beacons, skipping exact duplicates.

        Both scanners must already be in the same frame. `other` is drained.
        """
        if other is self:
            return
        seen = set(self.beacons)
        while other.beacons:
            beacon = other.beacons.pop()
            if beacon not in seen:
                seen.add(beacon)
                self.beacons.append(beacon)
