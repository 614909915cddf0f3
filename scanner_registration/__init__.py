"""
Scanner registration.

Recovers the orientation and position of 3D scanners that each report beacons
in their own frame, and merges all beacons into one deduplicated cloud.

Subpackages:
- common/: integer geometry, rotation group, parameter models, reports
- frontend/: beacon report reader
- backend/: Scanner, pairwise registration, base-frame accumulation
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

__version__ = "0.1.0"

__all__ = [
    "Point",
    "Displacement",
    "Rotation",
    "Scanner",
    "diff",
    "run_registration",
    "RegistrationError",
    "parse_scanners",
    "load_scanners",
]

_LAZY_ATTRS: dict[str, tuple[str, str]] = {
    "Point": ("scanner_registration.common.geometry", "Point"),
    "Displacement": ("scanner_registration.common.geometry", "Displacement"),
    "Rotation": ("scanner_registration.common.geometry", "Rotation"),
    "Scanner": ("scanner_registration.backend.scanner", "Scanner"),
    "diff": ("scanner_registration.backend.registration", "diff"),
    "run_registration": ("scanner_registration.backend.pipeline", "run_registration"),
    "RegistrationError": ("scanner_registration.backend.accumulation", "RegistrationError"),
    "parse_scanners": ("scanner_registration.frontend.scanner_io", "parse_scanners"),
    "load_scanners": ("scanner_registration.frontend.scanner_io", "load_scanners"),
}


def __getattr__(name: str) -> Any:
    target = _LAZY_ATTRS.get(name)
    if target is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module_name, attr_name = target
    module = import_module(module_name)
    return getattr(module, attr_name)


def __dir__() -> list[str]:
    return sorted(set(globals().keys()) | set(_LAZY_ATTRS.keys()))
