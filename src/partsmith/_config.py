from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

CONFIG_DIR = Path.home() / ".partsmith"
CONFIG_FILE = CONFIG_DIR / "partsmith.cfg"
DEFAULT_NOZZLE_DIAMETER = 0.4
DEFAULT_CONFIG = {
    "_comment": "Valid units: millimeters (default), meters, inches. Value is case-insensitive.",
    "units": "millimeters",
    "nozzle_diameter": DEFAULT_NOZZLE_DIAMETER,
}
_UNIT_INFO: Dict[str, Dict[str, Any]] = {
    "millimeters": {"label": "mm", "scale_to_mm": 1.0},
    "meters": {"label": "m", "scale_to_mm": 1000.0},
    "inches": {"label": "in", "scale_to_mm": 25.4},
}
_UNIT_ALIASES = {
    "millimeter": "millimeters",
    "millimeters": "millimeters",
    "mm": "millimeters",
    "meter": "meters",
    "meters": "meters",
    "m": "meters",
    "inch": "inches",
    "inches": "inches",
    "in": "inches",
}


@dataclass(frozen=True)
class UnitSettings:
    """Resolved units from partsmith.cfg."""

    name: str
    label: str
    scale_to_mm: float


@dataclass(frozen=True)
class PrinterSettings:
    """Printer hints used by the CLI diagnostics."""

    nozzle_diameter: float


def ensure_user_config(config_file: Path = CONFIG_FILE) -> None:
    """Ensure ~/.partsmith/partsmith.cfg exists with sane defaults."""

    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        return

    if config_file.exists():
        return

    try:
        config_file.write_text(json.dumps(DEFAULT_CONFIG, indent=2) + "\n")
    except OSError:
        return


def _load_user_config(config_file: Path = CONFIG_FILE) -> Dict[str, Any]:
    ensure_user_config(config_file)
    try:
        return json.loads(config_file.read_text())
    except (OSError, json.JSONDecodeError):
        return DEFAULT_CONFIG.copy()


def _normalize_units(value: str) -> str | None:
    key = value.strip().lower()
    if key in _UNIT_INFO:
        return key
    return _UNIT_ALIASES.get(key)


def get_unit_settings(config_file: Path = CONFIG_FILE) -> UnitSettings:
    """Return the configured units and the conversion to millimeters."""

    raw_config = _load_user_config(config_file)
    raw_units = str(raw_config.get("units", DEFAULT_CONFIG["units"]))
    normalized = _normalize_units(raw_units)
    if normalized is None:
        normalized = DEFAULT_CONFIG["units"]

    info = _UNIT_INFO[normalized]
    return UnitSettings(name=normalized, label=info["label"], scale_to_mm=info["scale_to_mm"])


def get_printer_settings(config_file: Path = CONFIG_FILE) -> PrinterSettings:
    raw_config = _load_user_config(config_file)
    try:
        nozzle = float(raw_config.get("nozzle_diameter", DEFAULT_NOZZLE_DIAMETER))
    except (TypeError, ValueError):
        nozzle = DEFAULT_NOZZLE_DIAMETER
    if nozzle < 0:
        nozzle = DEFAULT_NOZZLE_DIAMETER
    return PrinterSettings(nozzle_diameter=nozzle)
