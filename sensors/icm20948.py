"""ICM20948 9-DOF IMU sensor (I2C).

Only the 3-axis accelerometer is used here: the gravity vector tells us
how the device is being held.

I2C Address: 0x68 (can be 0x69 with jumper)

Demo mode sweeps a simulated gravity vector round the screen plane at
``sweep_dps`` degrees per second, with a little jitter, so every sector
and dead zone gets visited.
"""

import random
import logging
import time
from typing import Optional

from orientation.angle import sample_for_angle
from orientation.models import Sample
from sensors.base import BaseSensor

logger = logging.getLogger(__name__)

try:
    import board
    import busio
    import adafruit_icm20x
    _lib_available = True
except (ImportError, NotImplementedError):
    # Blinka raises NotImplementedError on boards it doesn't recognise
    _lib_available = False


class ICM20948Sensor(BaseSensor):
    def _init_hardware(self) -> None:
        self._sensor = None
        self._sim_start = time.monotonic()
        if not _lib_available:
            logger.info('ICM20948: adafruit_icm20x library not available')
            return

        try:
            i2c = busio.I2C(board.SCL, board.SDA)
            self._sensor = adafruit_icm20x.ICM20948(i2c, address=self.address)
            self._hw_available = True
            logger.info('ICM20948: ready on I2C 0x%02x', self.address)
        except Exception as e:
            logger.info('ICM20948: init failed - %s', e)

    def _read_hardware(self) -> Optional[Sample]:
        try:
            return Sample.from_values(self._sensor.acceleration)
        except Exception as e:
            logger.debug('ICM20948 read error: %s', e)
            return None

    def _simulate(self) -> Sample:
        elapsed = time.monotonic() - self._sim_start
        angle = (elapsed * self._cfg.get('sweep_dps', 30)) % 360
        angle += random.uniform(-2, 2)
        return sample_for_angle(
            angle,
            gravity=self._cfg.get('gravity', 9.81),
            z=random.uniform(-1, 1),
        )

    def close(self) -> None:
        self._sensor = None
