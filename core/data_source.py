"""Sample source abstraction for Orientation Station.

A SampleSource pushes accelerometer samples to registered listeners.
The controller doesn't care where samples come from -- it just calls
register() and unregister().

PollingSource is the threaded implementation: each registration gets its
own background thread that calls fetch() every ``interval`` seconds and
hands the result to the listener.
"""

import itertools
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from orientation.models import Sample

logger = logging.getLogger(__name__)

Listener = Callable[[Sample], None]

_handle_ids = itertools.count(1)


@dataclass(frozen=True)
class SubscriptionHandle:
    """Opaque token returned by register()."""

    id: int
    source_id: str


class SampleSource(ABC):
    """Interface every sample provider implements."""

    @abstractmethod
    def register(self, listener: Listener) -> SubscriptionHandle:
        """Start delivering samples to ``listener``.

        Raises:
            SubscriptionError: the underlying sensor can't be subscribed to.
        """
        ...

    @abstractmethod
    def unregister(self, handle: SubscriptionHandle) -> None:
        """Stop delivering to the listener behind ``handle``. Unknown handles are ignored."""
        ...


class _Worker:
    def __init__(self, listener: Listener):
        self.listener = listener
        self.stop = threading.Event()
        self.thread: Optional[threading.Thread] = None


class PollingSource(SampleSource):
    """Base class for sources that poll a device from background threads.

    Subclasses implement fetch(), which runs in the worker thread.
    """

    def __init__(self, source_id: str, config: Dict):
        self.source_id = source_id
        self.config = config
        self.interval = config.get("interval", 0.066)  # seconds
        self._workers: Dict[SubscriptionHandle, _Worker] = {}
        self._lock = threading.Lock()

    def register(self, listener: Listener) -> SubscriptionHandle:
        handle = SubscriptionHandle(next(_handle_ids), self.source_id)
        worker = _Worker(listener)
        worker.thread = threading.Thread(
            target=self._run, args=(worker,), daemon=True,
            name=f"src-{self.source_id}-{handle.id}",
        )
        with self._lock:
            self._workers[handle] = worker
        worker.thread.start()
        logger.info("Source %s: listener %d registered (%.3fs interval)",
                    self.source_id, handle.id, self.interval)
        return handle

    def unregister(self, handle: SubscriptionHandle) -> None:
        """Signal the worker to stop. Does not wait for it to exit."""
        with self._lock:
            worker = self._workers.pop(handle, None)
        if worker is None:
            logger.debug("Source %s: unknown handle %s", self.source_id, handle)
            return
        worker.stop.set()
        logger.info("Source %s: listener %d unregistered", self.source_id, handle.id)

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._workers)

    def _run(self, worker: _Worker):
        """Poll loop -- fetch and deliver until stopped."""
        while not worker.stop.is_set():
            try:
                sample = self.fetch()
                if sample is not None and not worker.stop.is_set():
                    worker.listener(sample)
            except Exception as exc:
                logger.error("Source %s delivery error: %s", self.source_id, exc)

            # wait() returns early as soon as unregister() fires
            worker.stop.wait(self.interval)

    @abstractmethod
    def fetch(self) -> Optional[Sample]:
        """Read one sample. Runs in a worker thread.

        Returns:
            A Sample, or None to skip this cycle.
        """
        ...

    def close(self):
        """Unregister every listener. Override to release hardware too."""
        with self._lock:
            handles = list(self._workers)
        for handle in handles:
            self.unregister(handle)
