from __future__ import annotations

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

CONFIG_DIR = Path.home() / ".polygeo"
CONFIG_FILE = CONFIG_DIR / "polygeo.cfg"
DEFAULT_CONFIG = {
    "_comment": "Valid units: millimeters (default), meters, inches. proximity is the default merge tolerance.",
    "units": "millimeters",
    "proximity": 0.0,
}
_UNIT_LABELS: Dict[str, str] = {
    "millimeters": "mm",
    "meters": "m",
    "inches": "in",
}
_UNIT_ALIASES = {
    "millimeter": "millimeters",
    "mm": "millimeters",
    "meter": "meters",
    "m": "meters",
    "inch": "inches",
    "in": "inches",
}


@dataclass(frozen=True)
class GeometrySettings:
    """Resolved settings from polygeo.cfg.

    ``units`` only labels lengths in CLI output; coordinates are never scaled.
    ``proximity`` is the default merge tolerance.
    """

    units: str
    label: str
    proximity: float


def ensure_user_config() -> None:
    """Ensure ~/.polygeo/polygeo.cfg exists with sane defaults."""

    try:
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    except OSError:
        return

    if CONFIG_FILE.exists():
        return

    try:
        CONFIG_FILE.write_text(json.dumps(DEFAULT_CONFIG, indent=2) + "\n")
    except OSError:
        return


def _load_user_config() -> Dict[str, Any]:
    ensure_user_config()
    try:
        data = json.loads(CONFIG_FILE.read_text())
    except (OSError, json.JSONDecodeError):
        return DEFAULT_CONFIG.copy()
    return data if isinstance(data, dict) else DEFAULT_CONFIG.copy()


def _normalize_units(value: str) -> str | None:
    key = value.strip().lower()
    if key in _UNIT_LABELS:
        return key
    return _UNIT_ALIASES.get(key)


def _normalize_proximity(value: Any) -> float:
    try:
        prox = float(value)
    except (TypeError, ValueError):
        return float(DEFAULT_CONFIG["proximity"])
    if not math.isfinite(prox) or prox < 0:
        return float(DEFAULT_CONFIG["proximity"])
    return prox


def get_settings() -> GeometrySettings:
    """Return the configured units and default merge proximity."""

    raw_config = _load_user_config()
    normalized = _normalize_units(str(raw_config.get("units", DEFAULT_CONFIG["units"])))
    if normalized is None:
        normalized = str(DEFAULT_CONFIG["units"])
    proximity = _normalize_proximity(raw_config.get("proximity", DEFAULT_CONFIG["proximity"]))
    return GeometrySettings(units=normalized, label=_UNIT_LABELS[normalized], proximity=proximity)
