"""
Registration pipeline: budget check -> accumulation -> merge -> report.

This is the single entry point the CLI (and library users) call with scanners
in their local frames. The input scanners are copied; callers keep their data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from scanner_registration.backend.accumulation import (
    RegistrationError,
    max_scanner_distance,
    merge_scanners,
    register_scanners,
)
from scanner_registration.backend.scanner import Scanner
from scanner_registration.common.geometry import Point
from scanner_registration.common.registration_report import RegistrationReport
from scanner_registration.config import BudgetConfig, ScannerRegistrationConfig

logger = logging.getLogger(__name__)


@dataclass
class RegistrationResult:
    """Outcome of a complete registration run."""
    merged: Scanner  # deduplicated beacons in the base frame
    scanners: List[Scanner]  # every input scanner, moved into the base frame
    positions: List[Point]  # scanner positions in the base frame
    report: RegistrationReport

    @property
    def n_beacons(self) -> int:
        return len(self.merged)

    @property
    def max_scanner_distance(self) -> int:
        return max_scanner_distance(self.positions)


def check_budget(scanners: Sequence[Scanner], budget: BudgetConfig) -> None:
    """
    Reject inputs larger than the configured work bounds.

    Raises:
        ValueError: If there are too many scanners or beacons
    """
    if not scanners:
        raise ValueError("no scanners to register")
    if len(scanners) > budget.max_scanners:
        raise ValueError(
            f"{len(scanners)} scanners exceeds max_scanners={budget.max_scanners}"
        )
    for i, scanner in enumerate(scanners):
        if len(scanner) > budget.max_beacons_per_scanner:
            raise ValueError(
                f"scanner {i} has {len(scanner)} beacons, exceeds "
                f"max_beacons_per_scanner={budget.max_beacons_per_scanner}"
            )


def run_registration(
    scanners: Sequence[Scanner],
    config: Optional[ScannerRegistrationConfig] = None,
) -> RegistrationResult:
    """
    Register and merge `scanners`.

    Raises:
        ValueError: If the input exceeds the configured budget
        RegistrationError: If the scanners do not form one connected overlap graph
    """
    config = config or ScannerRegistrationConfig()
    check_budget(scanners, config.budget)

    working = [scanner.copy() for scanner in scanners]
    report = RegistrationReport(
        n_scanners=len(working),
        min_overlap=config.match.min_overlap,
    )

    positions = register_scanners(working, config.match.min_overlap, report)

    merged = merge_scanners(working)
    report.n_beacons = len(merged)
    report.max_scanner_distance = max_scanner_distance(positions)
    report.validate()

    logger.info(
        "registered %d scanners in %d rounds: %d beacons, max scanner distance %d",
        len(working), report.rounds, report.n_beacons, report.max_scanner_distance,
    )
    return RegistrationResult(merged=merged, scanners=working, positions=positions, report=report)


__all__ = [
    "RegistrationError",
    "RegistrationResult",
    "check_budget",
    "run_registration",
]
