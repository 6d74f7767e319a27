"""Orientation Station - Configuration

Defaults live here as plain dicts. An optional YAML file (see
orientation.yaml) can override any of them:

    orientation:
      dead_zone: 8
    source:
      type: sensor
      sensor_key: icm20948
      demo: true

Angles are in degrees, clockwise, 0 = upright portrait.

Sector map (boundaries at 45 / 135 / 225 / 315):
    315..45   Portrait, screen facing self
    45..135   Landscape, screen facing away
    135..225  Portrait, screen facing away
    225..315  Landscape, screen facing self
"""

import logging
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Orientation detection
# ---------------------------------------------------------------------------
ORIENTATION = {
    "dead_zone": 5,          # degrees either side of a boundary -> unclassified
    "flat_ratio": 4,         # (x^2 + y^2) * flat_ratio < z^2 -> device is flat
    "confirm_margin": 0,     # >0 defers flips this close to a dead zone
    "initial": "portrait",
}

# ---------------------------------------------------------------------------
# Sensor definitions
# ---------------------------------------------------------------------------
SENSORS = {
    "icm20948": {
        "label": "9-DOF IMU",
        "description": "ICM20948 accelerometer",
        "address": 0x68,        # 0x69 with the AD0 jumper closed
        "interval_ms": 66,      # UI-class cadence, ~15 Hz
        "gravity": 9.81,        # m/s^2, used by the simulated sweep
        "sweep_dps": 30,        # simulated rotation speed, degrees per second
    },
}

# ---------------------------------------------------------------------------
# Default sample source
# ---------------------------------------------------------------------------
SOURCE = {
    "type": "sensor",
    "sensor_key": "icm20948",
    "demo": False,
}


def load_config(path: str) -> Dict:
    """Load overrides from a YAML file. Missing file -> empty dict."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.warning("Config file not found: %s", path)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping")
    return data


def orientation_settings(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """ORIENTATION defaults with ``overrides`` applied on top."""
    merged = dict(ORIENTATION)
    if overrides:
        unknown = set(overrides) - set(ORIENTATION)
        if unknown:
            logger.warning("Ignoring unknown orientation settings: %s", ", ".join(sorted(unknown)))
        merged.update({k: v for k, v in overrides.items() if k in ORIENTATION})
    return merged


def source_settings(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """SOURCE defaults with ``overrides`` applied on top."""
    merged = dict(SOURCE)
    if overrides:
        merged.update(overrides)
    return merged
