"""Accelerometer sample source -- wraps BaseSensor drivers.

Bridges the sensors/ package into the SampleSource interface. One
AccelerometerSource owns one driver instance and polls it from a worker
thread per registered listener.
"""

import logging
from typing import Dict, Optional

from config import SENSORS
from core.data_source import PollingSource, SubscriptionHandle
from core.registry import register_source
from orientation.errors import SubscriptionError
from orientation.models import Sample
from sensors import SENSOR_CLASSES

logger = logging.getLogger(__name__)


@register_source("sensor")
class AccelerometerSource(PollingSource):
    """Polls an accelerometer driver and pushes Samples to listeners."""

    def __init__(self, source_id: str, config: Dict):
        sensor_key = config.get("sensor_key", source_id)
        sensor_cfg = SENSORS.get(sensor_key, {})
        interval_s = sensor_cfg.get("interval_ms", 66) / 1000.0
        config = dict(config)
        config.setdefault("interval", interval_s)
        super().__init__(source_id, config)

        self.sensor_key = sensor_key
        self.demo_mode = config.get("demo", False)
        self._sensor = None

        cls = SENSOR_CLASSES.get(sensor_key)
        if cls is None:
            logger.warning("AccelerometerSource %s: unknown sensor %r", source_id, sensor_key)
            return
        try:
            self._sensor = cls(sensor_cfg.get("address", 0x68), sensor_cfg)
            logger.info("AccelerometerSource %s initialized (%r)", source_id, self._sensor)
        except Exception as exc:
            logger.warning("AccelerometerSource %s init failed: %s", source_id, exc)

    def register(self, listener) -> SubscriptionHandle:
        if self._sensor is None:
            raise SubscriptionError(f"no {self.sensor_key} driver available")
        if self._sensor.simulated and not self.demo_mode:
            raise SubscriptionError(f"{self.sensor_key} not present on this device")
        return super().register(listener)

    def fetch(self) -> Optional[Sample]:
        if self._sensor is None:
            return None
        return self._sensor.read(demo=self.demo_mode)

    def set_demo(self, enabled: bool):
        """Toggle demo mode for this source."""
        self.demo_mode = enabled

    def close(self):
        super().close()
        if self._sensor:
            if not self._sensor.simulated:
                logger.info("AccelerometerSource %s closing, %.1f%% of reads ok",
                            self.source_id, self._sensor.reliability)
            self._sensor.close()
