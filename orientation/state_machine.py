"""Two-state (portrait/landscape) orientation machine.

Sectors are coalesced into their orientation family; an event is produced
only when the family differs from the current state. UNCLASSIFIED input is
a no-op, which together with the classifier's dead zones gives the
hysteresis around sector boundaries.
"""

import logging
from typing import Optional

from orientation.models import Orientation, Sector, TransitionEvent

logger = logging.getLogger(__name__)


class OrientationStateMachine:
    """Holds the stable orientation and the last classified sector."""

    def __init__(self, initial: Orientation = Orientation.PORTRAIT):
        self.current: Orientation = Orientation.parse(initial)
        self.last_sector: Optional[Sector] = None

    @property
    def is_portrait(self) -> bool:
        return self.current is Orientation.PORTRAIT

    def would_change(self, sector: Sector) -> bool:
        """True if feeding ``sector`` would flip the current orientation."""
        family = sector.orientation
        return family is not None and family is not self.current

    def feed(self, sector: Sector) -> Optional[TransitionEvent]:
        """Apply one classified sample. Returns an event only on change."""
        family = sector.orientation
        if family is None:
            return None

        self.last_sector = sector
        if family is self.current:
            return None

        previous, self.current = self.current, family
        logger.info("Orientation %s -> %s (%s)", previous.value, family.value, sector.value)
        return TransitionEvent(family, previous, sector)

    def force(self, orientation: Orientation) -> Optional[TransitionEvent]:
        """Set the orientation directly (manual lock)."""
        orientation = Orientation.parse(orientation)
        if orientation is self.current:
            return None
        previous, self.current = self.current, orientation
        logger.info("Orientation forced %s -> %s", previous.value, orientation.value)
        return TransitionEvent(orientation, previous, None)

    def __repr__(self) -> str:
        last = self.last_sector.value if self.last_sector else None
        return f"<OrientationStateMachine {self.current.value} last={last}>"
