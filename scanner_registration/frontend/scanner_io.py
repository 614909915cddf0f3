"""
Beacon report reader.

Input format (one block per scanner, blocks separated by blank lines):

    --- scanner 0 ---
    404,-588,-901
    528,-643,409

    --- scanner 1 ---
    686,422,578

The header line is optional. Every non-blank, non-header line must be an
"x,y,z" integer triple. Errors carry the 1-based line number and are raised
immediately; nothing is skipped.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from scanner_registration import constants
from scanner_registration.backend.scanner import Scanner
from scanner_registration.common.geometry import Point
from scanner_registration.config import InputConfig

logger = logging.getLogger(__name__)


class ScannerParseError(ValueError):
    """Malformed beacon report."""

    def __init__(self, message: str, line_no: Optional[int] = None) -> None:
        self.line_no = line_no
        prefix = f"line {line_no}: " if line_no is not None else ""
        super().__init__(prefix + message)


def parse_point(text: str, max_abs_coordinate: int = constants.MAX_ABS_COORDINATE_DEFAULT) -> Point:
    """
    Parse an "x,y,z" integer triple.

    Raises:
        ValueError: If the text is not three comma separated integers in range
    """
    parts = text.strip().split(constants.COORDINATE_SEPARATOR)
    if len(parts) != 3:
        raise ValueError(f"expected 3 comma separated coordinates, got {text.strip()!r}")
    try:
        coords = [int(part.strip()) for part in parts]
    except ValueError:
        raise ValueError(f"non-integer coordinate in {text.strip()!r}") from None
    for c in coords:
        if abs(c) > max_abs_coordinate:
            raise ValueError(f"coordinate {c} outside +/-{max_abs_coordinate}")
    return Point.from_components(coords)


def _finish_block(beacons: List[Point], sort_beacons: bool) -> Scanner:
    if sort_beacons:
        # Search order heuristic only; registration does not depend on it.
        beacons = sorted(beacons, key=lambda p: p.abs_taxicab())
    return Scanner(beacons)


def read_scanners(lines: Iterable[str], config: Optional[InputConfig] = None) -> List[Scanner]:
    """
    Parse beacon report lines into Scanners in their local frames.

    Raises:
        ScannerParseError: On malformed coordinates, a header without beacons,
            a header not preceded by a blank line, or input without scanners
    """
    config = config or InputConfig()
    scanners: List[Scanner] = []
    beacons: List[Point] = []
    header_line: Optional[int] = None

    line_no = 0
    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            if beacons:
                scanners.append(_finish_block(beacons, config.sort_beacons))
                beacons = []
            elif header_line is not None:
                raise ScannerParseError("scanner header without beacons", header_line)
            header_line = None
            continue

        if line.startswith(constants.SCANNER_HEADER_PREFIX):
            if beacons or header_line is not None:
                raise ScannerParseError("missing blank line before scanner header", line_no)
            header_line = line_no
            continue

        try:
            beacons.append(parse_point(line, config.max_abs_coordinate))
        except ValueError as exc:
            raise ScannerParseError(str(exc), line_no) from exc

    if beacons:
        scanners.append(_finish_block(beacons, config.sort_beacons))
    elif header_line is not None:
        raise ScannerParseError("scanner header without beacons", header_line)

    if not scanners:
        raise ScannerParseError("no scanners in input", line_no or None)

    logger.info(
        "read %d scanners (%d beacons)", len(scanners), sum(len(s) for s in scanners)
    )
    return scanners


def parse_scanners(text: str, config: Optional[InputConfig] = None) -> List[Scanner]:
    """read_scanners() over a string."""
    return read_scanners(text.splitlines(), config)


def load_scanners(path: str | Path, config: Optional[InputConfig] = None) -> List[Scanner]:
    """
    Read a beacon report file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ScannerParseError: If the report is malformed
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        return read_scanners(f, config)


def format_scanners(scanners: Iterable[Scanner]) -> str:
    """Render scanners in the input format (inverse of parse_scanners)."""
    blocks = []
    for i, scanner in enumerate(scanners):
        lines = [f"--- scanner {i} ---"]
        lines.extend(str(beacon) for beacon in scanner)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks) + "\n"
