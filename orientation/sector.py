"""Angle -> Sector classification with dead zones at quadrant boundaries.

Angles within ``dead_zone`` degrees of a boundary come back UNCLASSIFIED
so a device held near 45/135/225/315 degrees never alternates between
neighbouring sectors.
"""

import math
from typing import Optional

from orientation.models import Sector

BOUNDARIES = (45, 135, 225, 315)
DEFAULT_DEAD_ZONE = 5.0


def validate_dead_zone(dead_zone: float) -> float:
    if not 0 <= dead_zone < 45:
        raise ValueError(f"dead_zone must be in [0, 45), got {dead_zone!r}")
    return dead_zone


def boundary_distance(angle: float) -> float:
    """Circular distance in degrees from ``angle`` to the nearest boundary."""
    angle %= 360
    best = 360.0
    for boundary in BOUNDARIES:
        diff = abs(angle - boundary)
        best = min(best, diff, 360 - diff)
    return best


def classify(angle: Optional[float], dead_zone: float = DEFAULT_DEAD_ZONE) -> Sector:
    """Map an angle (or None for indeterminate) onto a Sector."""
    validate_dead_zone(dead_zone)
    if angle is None or not math.isfinite(angle):
        return Sector.UNCLASSIFIED

    angle %= 360
    if boundary_distance(angle) <= dead_zone:
        return Sector.UNCLASSIFIED

    if angle > 315 or angle < 45:
        return Sector.PORTRAIT_FACING_SELF
    if angle < 135:
        return Sector.LANDSCAPE_FACING_AWAY
    if angle < 225:
        return Sector.PORTRAIT_FACING_AWAY
    return Sector.LANDSCAPE_FACING_SELF
