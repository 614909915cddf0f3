"""
Backend package for scanner registration.

Scanner state and the registration operators.

Modules:
- scanner: Scanner beacon cloud (rotate, translate, distances_from, extend)
- registration: pairwise diff by distance-invariant voting
- accumulation: base-frame anchoring loop and merge
- pipeline: budget check + accumulation + report
"""

from __future__ import annotations

from scanner_registration.backend.scanner import Scanner
from scanner_registration.backend.registration import RegistrationMatch, diff
from scanner_registration.backend.accumulation import (
    RegistrationError,
    max_scanner_distance,
    merge_scanners,
    register_scanners,
)
from scanner_registration.backend.pipeline import (
    RegistrationResult,
    check_budget,
    run_registration,
)

__all__ = [
    "Scanner",
    "RegistrationMatch",
    "diff",
    "RegistrationError",
    "register_scanners",
    "merge_scanners",
    "max_scanner_distance",
    "RegistrationResult",
    "check_budget",
    "run_registration",
]
