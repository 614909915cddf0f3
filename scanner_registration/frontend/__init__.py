"""
Frontend package for scanner registration.

ORCHESTRATION ONLY: text in, Scanners out. All geometry lives in common/ and
backend/.
"""

from __future__ import annotations

from scanner_registration.frontend.scanner_io import (
    ScannerParseError,
    format_scanners,
    load_scanners,
    parse_point,
    parse_scanners,
    read_scanners,
)

__all__ = [
    "ScannerParseError",
    "format_scanners",
    "load_scanners",
    "parse_point",
    "parse_scanners",
    "read_scanners",
]
