"""Accelerometer drivers for Orientation Station.

Each driver inherits from BaseSensor and implements:
    _init_hardware()  -- attempt to initialise the physical sensor
    _read_hardware()  -- return a Sample from real hardware
    _simulate()       -- return a realistic fake Sample

The base class (sensors.base.BaseSensor) provides:
    read(demo)        -- unified read with retry logic and error handling
    simulated         -- property indicating whether hardware is available
    reliability       -- percentage of hardware reads that produced a sample
    close()           -- release hardware resources
"""

from sensors.icm20948 import ICM20948Sensor

SENSOR_CLASSES = {
    "icm20948": ICM20948Sensor,
}
