"""
Configuration for scanner registration.

Organizes parameters into logical groups and loads them from YAML files.

Sources are merged in order (later overrides earlier):
1. Defaults of RegistrationParams
2. Base YAML (config/scanner_registration_base.yaml)
3. Optional preset YAML
4. Explicit overrides (e.g. from the command line)

Usage:
    from scanner_registration.config import load_registration_config

    config = load_registration_config("/path/to/base.yaml", overrides={"min_overlap": 6})
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from scanner_registration import constants
from scanner_registration.common.param_models import RegistrationParams

CONFIG_SECTION = "scanner_registration"


@dataclass
class MatchConfig:
    """Voting configuration."""
    min_overlap: int = constants.MIN_OVERLAP


@dataclass
class InputConfig:
    """Beacon reader configuration."""
    sort_beacons: bool = True
    max_abs_coordinate: int = constants.MAX_ABS_COORDINATE_DEFAULT


@dataclass
class BudgetConfig:
    """Work bounds checked before registration starts."""
    max_scanners: int = constants.MAX_SCANNERS_DEFAULT
    max_beacons_per_scanner: int = constants.MAX_BEACONS_PER_SCANNER_DEFAULT


@dataclass
class ScannerRegistrationConfig:
    """Complete registration configuration."""
    match: MatchConfig = field(default_factory=MatchConfig)
    reader: InputConfig = field(default_factory=InputConfig)
    budget: BudgetConfig = field(default_factory=BudgetConfig)

    @classmethod
    def from_params(cls, params: RegistrationParams) -> "ScannerRegistrationConfig":
        """Create configuration from validated parameters."""
        return cls(
            match=MatchConfig(min_overlap=int(params.min_overlap)),
            reader=InputConfig(
                sort_beacons=bool(params.sort_beacons),
                max_abs_coordinate=int(params.max_abs_coordinate),
            ),
            budget=BudgetConfig(
                max_scanners=int(params.max_scanners),
                max_beacons_per_scanner=int(params.max_beacons_per_scanner),
            ),
        )


def load_yaml_config(config_path: str | Path) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
    """Merge configuration dictionaries (later configs override earlier)."""
    result: Dict[str, Any] = {}
    for config in configs:
        if config:
            _deep_merge(result, config)
    return result


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Deep merge override dict into base dict (mutates base)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value


def _section(path: Optional[str | Path]) -> Dict[str, Any]:
    if not path:
        return {}
    return load_yaml_config(path).get(CONFIG_SECTION, {}) or {}


def load_registration_params(
    base_path: Optional[str | Path] = None,
    preset_path: Optional[str | Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> RegistrationParams:
    """
    Load and validate registration parameters from YAML files.

    Args:
        base_path: Path to base configuration YAML
        preset_path: Optional path to preset override YAML
        overrides: Optional dictionary of parameter overrides

    Returns:
        Validated RegistrationParams model

    Raises:
        ValidationError: If configuration is invalid
    """
    merged = merge_configs(_section(base_path), _section(preset_path), overrides or {})
    return RegistrationParams(**merged)


def load_registration_config(
    base_path: Optional[str | Path] = None,
    preset_path: Optional[str | Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> ScannerRegistrationConfig:
    """Same as load_registration_params, grouped into ScannerRegistrationConfig."""
    params = load_registration_params(base_path, preset_path, overrides)
    return ScannerRegistrationConfig.from_params(params)


def get_default_config_path() -> Path:
    """Path to the base configuration file shipped next to the package."""
    pkg_root = Path(__file__).parent.parent
    return pkg_root / "config" / "scanner_registration_base.yaml"
