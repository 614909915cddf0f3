"""
Pairwise scanner registration by distance-invariant voting.

Given scanners `base` and `other` in unknown frames, find the rotation R and
displacement D such that rotate(p, R) + D lands at least `min_overlap` of
`other`'s beacons exactly on beacons of `base`.

Squared distances between beacons of the SAME scanner are invariant under
rotation and translation. For every hypothesis "origin (in base) is target
(in other)", every aux beacon of `other` at distance d from target is paired
with every beacon of `base` at distance d from origin. Each pair yields two
relative vectors that must be equal under R; rot_diff proposes R, improper
candidates are dropped, and so are candidates that do not actually map one
relative vector onto the other. The surviving hypothesis (R, origin - R target)
gets a vote from aux.

Votes are counted per distinct beacon of `other`: a key starts with the target
(the origin/target pair itself) and every aux that supports it is added once.
Every counted beacon lands exactly on a beacon of `base` under the key, so the
first key supported by `min_overlap` beacons is an overlap of that size.

With exact integer coordinates, a true overlap of N beacons supports one key
with all N beacons while coincidental distance collisions scatter over many keys.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

import numpy as np

from scanner_registration import constants
from scanner_registration.backend.scanner import Scanner
from scanner_registration.common.geometry import (
    Displacement,
    Point,
    Rotation,
    rot_diff,
    rotate,
)

logger = logging.getLogger(__name__)

VoteKey = Tuple[Rotation, Displacement]


# =============================================================================
# Data Structures
# =============================================================================


@dataclass(frozen=True)
class RegistrationMatch:
    """Accepted transform from `other`'s frame into `base`'s frame."""
    rotation: Rotation
    displacement: Displacement
    votes: int

    def as_pair(self) -> VoteKey:
        return (self.rotation, self.displacement)

    def apply(self, point: Point) -> Point:
        """Map a point of `other` into `base`'s frame."""
        return rotate(point, self.rotation) + self.displacement


# =============================================================================
# Helpers
# =============================================================================


def _signature_index(row: np.ndarray) -> Dict[int, List[int]]:
    """Map squared distance -> beacon indices at that distance (in beacon order)."""
    index: Dict[int, List[int]] = defaultdict(list)
    for i, d in enumerate(row.tolist()):
        index[d].append(i)
    return index


# =============================================================================
# Main Operator
# =============================================================================


def diff(
    base: Scanner,
    other: Scanner,
    min_overlap: int = constants.MIN_OVERLAP,
) -> Optional[RegistrationMatch]:
    """
    Find the transform taking `other`'s beacons onto `base`'s.

    Args:
        base: Scanner whose frame is the target frame
        other: Scanner to register
        min_overlap: Distinct supporting beacons required to accept a hypothesis

    Returns:
        RegistrationMatch, or None if no hypothesis reaches min_overlap
    """
    if min_overlap < constants.MIN_OVERLAP_FLOOR:
        raise ValueError(
            f"min_overlap must be >= {constants.MIN_OVERLAP_FLOOR}, got {min_overlap}"
        )
    if len(base) < min_overlap or len(other) < min_overlap:
        return None

    base_beacons = base.beacons
    other_beacons = other.beacons
    base_dists = base.distance_matrix()
    other_dists = other.distance_matrix().tolist()
    zero = Point.origin()

    # key -> beacons of `other` the key lands on beacons of `base`
    votes: Dict[VoteKey, Set[Point]] = {}

    for oi, origin in enumerate(base_beacons):
        signature = _signature_index(base_dists[oi])
        for ti, target in enumerate(other_beacons):
            target_dists = other_dists[ti]
            for ai, aux in enumerate(other_beacons):
                dist = target_dists[ai]
                if dist == 0:
                    continue
                matches = signature.get(dist)
                if not matches:
                    continue

                rel_aux = Point.from_displacement(aux - target)
                for ci in matches:
                    rel_ith = Point.from_displacement(base_beacons[ci] - origin)
                    if rel_ith == zero:
                        continue

                    rot = rot_diff(rel_aux, rel_ith)
                    if not rot.is_valid() or rotate(rel_aux, rot) != rel_ith:
                        continue

                    dsp = origin - rotate(target, rot)
                    key = (rot, dsp)
                    support = votes.setdefault(key, set())
                    support.add(target)
                    support.add(aux)
                    count = len(support)

                    if count >= min_overlap:
                        logger.debug(
                            "accepted rot=%s dsp=%s with %d supporting beacons (%d hypotheses)",
                            rot, dsp, count, len(votes),
                        )
                        return RegistrationMatch(rotation=rot, displacement=dsp, votes=count)

    logger.debug("no hypothesis reached %d votes (%d hypotheses)", min_overlap, len(votes))
    return None
