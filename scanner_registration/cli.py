#!/usr/bin/env python3
"""
Command line entry point: read a beacon report, register, print the result.

Exit codes:
    0  all scanners registered
    1  malformed input or configuration
    2  registration impossible (disconnected overlap graph)
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from scanner_registration.backend.pipeline import RegistrationError, run_registration
from scanner_registration.config import (
    ScannerRegistrationConfig,
    get_default_config_path,
    load_registration_params,
)
from scanner_registration.frontend.scanner_io import ScannerParseError, load_scanners, read_scanners

logger = logging.getLogger("scanner_registration")


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Register 3D scanners by shared beacons and merge their beacon clouds."
    )
    ap.add_argument("input", help="Beacon report file ('-' for stdin)")
    ap.add_argument("--config", help="Base configuration YAML (default: shipped base config)")
    ap.add_argument("--preset", help="Preset YAML merged over the base configuration")
    ap.add_argument("--min-overlap", type=int, help="Override min_overlap")
    ap.add_argument("--no-sort", action="store_true", help="Keep beacons in input order")
    ap.add_argument("--json", action="store_true", help="Print the registration report as JSON")
    ap.add_argument("--out", help="Write the JSON registration report to this path")
    ap.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    return ap


def _load_config(args: argparse.Namespace) -> ScannerRegistrationConfig:
    overrides = {}
    if args.min_overlap is not None:
        overrides["min_overlap"] = args.min_overlap
    if args.no_sort:
        overrides["sort_beacons"] = False

    base_path: Optional[Path] = Path(args.config) if args.config else get_default_config_path()
    if not args.config and not base_path.exists():
        base_path = None
    params = load_registration_params(base_path, args.preset, overrides)
    return ScannerRegistrationConfig.from_params(params)


def _write_report(path: Optional[str], report_dict: dict) -> None:
    if path:
        Path(path).write_text(json.dumps(report_dict, indent=2, sort_keys=True), encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _load_config(args)
        if args.input == "-":
            scanners = read_scanners(sys.stdin, config.reader)
        else:
            scanners = load_scanners(args.input, config.reader)
        result = run_registration(scanners, config)
    except RegistrationError as exc:
        logger.error("%s", exc)
        if exc.report is not None:
            _write_report(args.out, exc.report.to_dict())
            if args.json:
                print(json.dumps(exc.report.to_dict(), indent=2, sort_keys=True))
        return 2
    except (ScannerParseError, ValidationError, ValueError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 1

    report = result.report.to_dict()
    report["positions"] = [list(p.as_tuple()) for p in result.positions]
    _write_report(args.out, report)

    if args.json:
        print(json.dumps(report, indent=2, sort_keys=True))
    else:
        print(f"beacons: {result.n_beacons}")
        print(f"max_scanner_distance: {result.max_scanner_distance}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
