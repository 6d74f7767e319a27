"""Portrait/landscape detection from accelerometer samples.

Pipeline:
    estimate_angle()          -- sample -> whole-degree angle, or None when flat
    classify()                -- angle -> Sector (dead zones at 45/135/225/315)
    OrientationStateMachine   -- Sector stream -> stable Orientation + events
    ListeningController       -- source subscriptions -> sink notifications
"""

from orientation.models import Orientation, Sample, Sector, TransitionEvent
from orientation.errors import (
    AlreadyActiveError,
    NotActiveError,
    OrientationError,
    Result,
    SubscriptionError,
)
from orientation.angle import estimate_angle, sample_for_angle
from orientation.sector import boundary_distance, classify
from orientation.state_machine import OrientationStateMachine
from orientation.controller import ListeningController

__all__ = [
    "Orientation",
    "Sample",
    "Sector",
    "TransitionEvent",
    "OrientationError",
    "SubscriptionError",
    "AlreadyActiveError",
    "NotActiveError",
    "Result",
    "estimate_angle",
    "sample_for_angle",
    "boundary_distance",
    "classify",
    "OrientationStateMachine",
    "ListeningController",
]
