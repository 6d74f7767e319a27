#!/usr/bin/env python3
"""Orientation Station -- Entry point.

Watches an accelerometer and reports every portrait/landscape change.

Usage:
    python3 main.py                      # Read real hardware (ICM20948)
    python3 main.py --demo               # Simulated rotating device
    python3 main.py --config my.yaml     # Override settings
    python3 main.py --log-level DEBUG    # Per-sample angle/sector logging

Ctrl+C stops listening and exits.
"""

__version__ = "1.0.0"

import argparse
import logging
import sys
import time

import config
from core import EventBus, ORIENTATION_TOPIC, get_source_class
from orientation import ListeningController

import sources  # noqa: F401  (registers source types)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Orientation Station -- portrait/landscape detection from an accelerometer",
    )
    parser.add_argument(
        "--demo", action="store_true",
        help="Use simulated sensor data instead of hardware",
    )
    parser.add_argument(
        "--config", default="orientation.yaml",
        help="Path to YAML config (default: orientation.yaml)",
    )
    parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set the logging verbosity (default: INFO)",
    )
    parser.add_argument(
        "--version", action="version",
        version=f"Orientation Station {__version__}",
    )
    return parser.parse_args(argv)


def setup_logging(level_name: str) -> None:
    """Configure root logger with a consistent format."""
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-7s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )


def build_source(source_cfg):
    """Instantiate the configured sample source through the registry."""
    cfg = dict(source_cfg)
    source_type = cfg.pop("type")
    source_id = cfg.pop("id", f"{source_type}.{cfg.get('sensor_key', 'default')}")
    return get_source_class(source_type)(source_id, cfg)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)

    logger = logging.getLogger(__name__)
    logger.info("Orientation Station v%s starting", __version__)

    overrides = config.load_config(args.config)
    source_cfg = config.source_settings(overrides.get("source"))
    if args.demo:
        source_cfg["demo"] = True

    source = build_source(source_cfg)
    controller = ListeningController(source, overrides.get("orientation"))

    bus = EventBus()
    bus.subscribe(
        ORIENTATION_TOPIC,
        lambda orientation: logger.info("Orientation changed: %s", orientation.value),
    )

    result = controller.start(bus)
    if not result:
        logger.error("Could not start: %s", result.error)
        source.close()
        return 1

    logger.info("Listening (current: %s)", controller.current_orientation().value)
    try:
        while True:
            time.sleep(0.5)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        controller.stop()
        source.close()
        logger.info("Shutdown complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
