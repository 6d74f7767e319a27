"""Accelerometer sample -> screen rotation angle.

The gravity vector is projected onto the screen plane and converted into a
clockwise angle where 0 means the device is upright in portrait. When the
device lies nearly flat the projection is too short to be meaningful and
the angle is reported as indeterminate (None).
"""

import math
from typing import Optional

from orientation.models import Sample

# Readings whose in-plane magnitude is this many times smaller than z^2
# are treated as "lying flat".
DEFAULT_FLAT_RATIO = 4.0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def estimate_angle(sample: Sample, flat_ratio: float = DEFAULT_FLAT_RATIO) -> Optional[int]:
    """Return the rotation angle in whole degrees [0, 360), or None.

    Args:
        sample:     Raw accelerometer reading.
        flat_ratio: Multiplier applied to x^2 + y^2 before comparing it
                    against z^2.

    Returns:
        Angle in degrees, or None when the z axis dominates.
    """
    x, y, z = -sample.x, -sample.y, -sample.z
    magnitude = x * x + y * y
    # written as "not >=" so NaN readings also land here
    if not magnitude * flat_ratio >= z * z:
        return None

    degrees = math.degrees(math.atan2(-y, x))
    if not math.isfinite(degrees):
        return None

    angle = 90 - _round_half_up(degrees)
    while angle >= 360:
        angle -= 360
    while angle < 0:
        angle += 360
    return angle


def sample_for_angle(angle: float, gravity: float = 9.81, z: float = 0.0) -> Sample:
    """Inverse of estimate_angle: a reading that estimates to ``angle``."""
    phi = math.radians(90.0 - angle)
    return Sample(-gravity * math.cos(phi), gravity * math.sin(phi), z)
