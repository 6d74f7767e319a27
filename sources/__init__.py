"""Sample source implementations for Orientation Station.

Importing this package registers all built-in source types.
"""

from sources.sensor_source import AccelerometerSource

__all__ = ["AccelerometerSource"]
