"""Accelerometer driver base class.

Drivers only know how to talk to their chip (or fake it). Retrying a
flaky I2C read, counting misses and keeping the log quiet at ~15 reads a
second is handled once, here.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import time
import logging

from orientation.models import Sample

logger = logging.getLogger(__name__)


class BaseSensor(ABC):
    """One accelerometer on one bus address.

    A driver sets ``self._hw_available`` in _init_hardware() when the chip
    answers; otherwise it stays in simulated mode and read() only returns
    data when asked for demo samples.
    """

    MAX_RETRIES: int = 2
    RETRY_DELAY: float = 0.01    # seconds
    LOG_EVERY: int = 50          # consecutive misses between warnings

    def __init__(self, address: int, cfg: Optional[Dict[str, Any]] = None):
        self.address = address
        self._cfg = cfg or {}
        self._hw_available = False
        self._misses_in_a_row = 0
        self._reads = 0
        self._misses = 0

        try:
            self._init_hardware()
        except Exception as exc:
            logger.warning("%s at 0x%02x unavailable: %s", type(self).__name__, address, exc)
            self._hw_available = False

    @abstractmethod
    def _init_hardware(self) -> None:
        ...

    @abstractmethod
    def _read_hardware(self) -> Optional[Sample]:
        """One raw read. May raise or return None on a bad transfer."""
        ...

    @abstractmethod
    def _simulate(self) -> Sample:
        ...

    @property
    def simulated(self) -> bool:
        return not self._hw_available

    @property
    def reliability(self) -> float:
        """Share of hardware reads that produced a sample, in percent."""
        if not self._reads:
            return 100.0
        return 100.0 * (self._reads - self._misses) / self._reads

    def read(self, demo: bool = False) -> Optional[Sample]:
        """Next sample: simulated in demo mode, None when hardware is missing or silent."""
        if demo:
            return self._simulate()
        if not self._hw_available:
            return None

        self._reads += 1
        sample, error = self._read_with_retry()
        if sample is not None:
            self._misses_in_a_row = 0
            return sample

        self._record_miss(error)
        return None

    def _read_with_retry(self):
        error = None
        for attempt in range(self.MAX_RETRIES):
            if attempt:
                time.sleep(self.RETRY_DELAY)
            try:
                sample = self._read_hardware()
            except Exception as exc:
                error = exc
                continue
            if sample is not None:
                return sample, None
        return None, error

    def _record_miss(self, error: Optional[Exception]) -> None:
        self._misses += 1
        self._misses_in_a_row += 1
        if self._misses_in_a_row == 1 or self._misses_in_a_row % self.LOG_EVERY == 0:
            logger.warning(
                "%s: no sample (%d misses in a row, %.1f%% reliable): %s",
                type(self).__name__, self._misses_in_a_row, self.reliability,
                error or "empty read",
            )

    def close(self) -> None:
        pass

    def __repr__(self) -> str:
        mode = "live" if self._hw_available else "simulated"
        return f"<{type(self).__name__} 0x{self.address:02x} {mode} {self.reliability:.0f}%>"
