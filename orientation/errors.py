"""Error taxonomy and result values for the orientation controller.

Controller operations never raise these; they hand them back inside a
Result so callers can branch on success without try/except.
"""

from dataclasses import dataclass
from typing import Optional


class OrientationError(Exception):
    """Base class for all controller errors."""


class SubscriptionError(OrientationError):
    """The sample source refused (or failed) a listener registration."""


class AlreadyActiveError(OrientationError):
    """start() was called while a listening session already exists."""


class NotActiveError(OrientationError):
    """An operation needs an active session but the controller is stopped."""


@dataclass(frozen=True)
class Result:
    """Outcome of a controller operation. Truthy on success."""

    error: Optional[OrientationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls) -> "Result":
        return cls()

    @classmethod
    def failure(cls, error: OrientationError) -> "Result":
        return cls(error=error)
