"""Value types shared by the orientation pipeline."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence


class Orientation(Enum):
    """Stable, externally visible device orientation."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"

    @classmethod
    def parse(cls, value) -> "Orientation":
        """Accept an Orientation or its name/value ("portrait", "LANDSCAPE")."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"unknown orientation: {value!r}") from None


class Sector(Enum):
    """90-degree attitude quadrant, or UNCLASSIFIED inside a dead zone."""

    PORTRAIT_FACING_SELF = "portrait_facing_self"       # centred on 0
    LANDSCAPE_FACING_AWAY = "landscape_facing_away"     # centred on 90
    PORTRAIT_FACING_AWAY = "portrait_facing_away"       # centred on 180
    LANDSCAPE_FACING_SELF = "landscape_facing_self"     # centred on 270
    UNCLASSIFIED = "unclassified"

    @property
    def orientation(self) -> Optional[Orientation]:
        """Orientation family of this sector, None when unclassified."""
        return _SECTOR_FAMILY.get(self)


_SECTOR_FAMILY = {
    Sector.PORTRAIT_FACING_SELF: Orientation.PORTRAIT,
    Sector.PORTRAIT_FACING_AWAY: Orientation.PORTRAIT,
    Sector.LANDSCAPE_FACING_AWAY: Orientation.LANDSCAPE,
    Sector.LANDSCAPE_FACING_SELF: Orientation.LANDSCAPE,
}


@dataclass(frozen=True)
class Sample:
    """One accelerometer reading (m/s^2 on each axis)."""

    x: float
    y: float
    z: float

    @classmethod
    def from_values(cls, values: Sequence[float]) -> "Sample":
        """Build a sample from the first three items of a driver tuple."""
        return cls(float(values[0]), float(values[1]), float(values[2]))


@dataclass(frozen=True)
class TransitionEvent:
    """Emitted exactly when the stable orientation changes.

    ``sector`` is the sector that caused the change, or None when the
    change was requested through a manual lock.
    """

    orientation: Orientation
    previous: Orientation
    sector: Optional[Sector] = None
