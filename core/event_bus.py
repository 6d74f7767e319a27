"""Thread-safe event bus for Orientation Station.

The EventBus doubles as the controller's notification sink: orientation
changes arrive via on_orientation_changed() and are published under the
"orientation" topic. Subscribers are called directly on the publishing
thread -- hop to another thread/queue yourself if you need to.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from orientation.models import Orientation

logger = logging.getLogger(__name__)

ORIENTATION_TOPIC = "orientation"


class NotificationSink(ABC):
    """Receives one call per confirmed orientation change."""

    @abstractmethod
    def on_orientation_changed(self, orientation: Orientation) -> None:
        ...


class EventBus(NotificationSink):
    """Topic-based publish/subscribe with a latest-value cache."""

    def __init__(self):
        self._latest: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self._subscribers: Dict[str, List[Callable]] = {}

    def publish(self, topic: str, payload: Any):
        """Push data from any thread. Thread-safe."""
        with self._lock:
            self._latest[topic] = payload
            callbacks = list(self._subscribers.get(topic, []))

        for cb in callbacks:
            try:
                cb(payload)
            except Exception as exc:
                logger.error("EventBus callback error [%s]: %s", topic, exc)

    def subscribe(self, topic: str, callback: Callable):
        """Register a callback for a topic."""
        with self._lock:
            self._subscribers.setdefault(topic, []).append(callback)

    def unsubscribe(self, topic: str, callback: Callable):
        """Remove a callback."""
        with self._lock:
            if topic in self._subscribers:
                self._subscribers[topic] = [
                    cb for cb in self._subscribers[topic] if cb != callback
                ]

    def get_latest(self, topic: Optional[str] = None) -> Any:
        """Get latest payload for a topic, or all topics."""
        with self._lock:
            if topic:
                return self._latest.get(topic)
            return dict(self._latest)

    def on_orientation_changed(self, orientation: Orientation) -> None:
        self.publish(ORIENTATION_TOPIC, orientation)
