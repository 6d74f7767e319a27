"""Core framework for Orientation Station.

Architecture:
    SampleSource  -- pushes accelerometer samples to registered listeners
    PollingSource -- SampleSource that polls a device from background threads
    EventBus      -- thread-safe message bus; also the notification sink
    Registry      -- registers sample source types by name
"""

from core.data_source import PollingSource, SampleSource, SubscriptionHandle
from core.event_bus import EventBus, NotificationSink, ORIENTATION_TOPIC
from core.registry import SOURCE_REGISTRY, get_source_class, register_source

__all__ = [
    "SampleSource",
    "PollingSource",
    "SubscriptionHandle",
    "EventBus",
    "NotificationSink",
    "ORIENTATION_TOPIC",
    "SOURCE_REGISTRY",
    "get_source_class",
    "register_source",
]
