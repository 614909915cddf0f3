"""
Base-frame accumulation.

Anchors every scanner to the frame of scanner 0 by repeatedly registering
unbased scanners against based ones, then folds all based scanners into a
single deduplicated beacon cloud.

Each round is two-phase:
1. Match: try every unbased scanner against the scanners that were based when
   the round started; collect (scanner, base, match).
2. Apply: rotate + translate each matched scanner in place and mark it based.

The loop ends when a round bases nothing. Scanners left unbased at that point
mean the overlap graph is disconnected; this raises RegistrationError rather
than returning a partial merge.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

import numpy as np
from scipy.spatial.distance import pdist

from scanner_registration import constants
from scanner_registration.backend.registration import RegistrationMatch, diff
from scanner_registration.backend.scanner import Scanner
from scanner_registration.common.geometry import Point
from scanner_registration.common.registration_report import EdgeRecord, RegistrationReport

logger = logging.getLogger(__name__)


class RegistrationError(RuntimeError):
    """The scanner set cannot be brought into one frame."""

    def __init__(self, unbased: Sequence[int], report: Optional[RegistrationReport] = None) -> None:
        self.unbased = sorted(unbased)
        self.report = report
        super().__init__(
            f"{len(self.unbased)} scanner(s) share too few beacons with any based scanner: "
            f"{self.unbased}"
        )


def register_scanners(
    scanners: List[Scanner],
    min_overlap: int = constants.MIN_OVERLAP,
    report: Optional[RegistrationReport] = None,
) -> List[Point]:
    """
    Bring every scanner into the frame of scanner 0, in place.

    Args:
        scanners: Scanners in their local frames; mutated into the base frame
        min_overlap: Passed to diff()
        report: Optional report to record edges, rounds and failures in

    Returns:
        Scanner positions in the base frame, indexed like `scanners`

    Raises:
        RegistrationError: If some scanner can not be based
    """
    if not scanners:
        raise ValueError("register_scanners needs at least one scanner")

    origin = constants.ORIGIN_SCANNER_INDEX
    base: List[int] = [origin]
    based: Set[int] = {origin}
    positions: Dict[int, Point] = {origin: Point.origin()}
    # (base, scanner) pairs already known not to match; both sides are fixed until based
    failed: Set[Tuple[int, int]] = set()

    rounds = 0
    while True:
        rounds += 1
        round_base = list(base)
        found: List[Tuple[int, int, RegistrationMatch]] = []

        for si in range(len(scanners)):
            if si in based:
                continue
            for bi in round_base:
                if (bi, si) in failed:
                    continue
                logger.debug("checking base scanner %d against scanner %d", bi, si)
                match = diff(scanners[bi], scanners[si], min_overlap)
                if match is None:
                    failed.add((bi, si))
                    continue
                found.append((si, bi, match))
                break

        for si, bi, match in found:
            scanners[si].rotate(match.rotation)
            scanners[si] += match.displacement
            base.append(si)
            based.add(si)
            positions[si] = Point.from_displacement(match.displacement)
            logger.info(
                "scanner %d based via scanner %d: rot=%s position=%s",
                si, bi, match.rotation, match.displacement,
            )
            if report is not None:
                report.edges.append(EdgeRecord(
                    scanner=si,
                    base=bi,
                    rotation=str(match.rotation),
                    displacement=match.displacement.as_tuple(),
                    votes=match.votes,
                    round=rounds,
                ))

        if not found:
            break

    unbased = [si for si in range(len(scanners)) if si not in based]
    if report is not None:
        report.rounds = rounds
        report.unbased = unbased
    if unbased:
        logger.error("registration stalled after %d rounds; unbased: %s", rounds, unbased)
        raise RegistrationError(unbased, report)

    return [positions[si] for si in range(len(scanners))]


def merge_scanners(scanners: Sequence[Scanner]) -> Scanner:
    """
    Union of all beacons, deduplicated. All scanners must share one frame.

    The inputs are left untouched.
    """
    merged = Scanner()
    for scanner in scanners:
        merged.extend(scanner.copy())
    return merged


def max_scanner_distance(positions: Sequence[Point]) -> int:
    """Largest taxicab distance between any two scanner positions (0 for fewer than two)."""
    if len(positions) < 2:
        return 0
    coords = np.array([p.as_tuple() for p in positions], dtype=np.int64)
    return int(round(pdist(coords, "cityblock").max()))
