"""Sample source registry for Orientation Station.

Register source types by name. The entry point reads the ``source``
section of the configuration and instantiates the right class by
looking it up here.

Usage:
    @register_source("sensor")
    class AccelerometerSource(PollingSource):
        ...
"""

import logging

logger = logging.getLogger(__name__)

SOURCE_REGISTRY = {}


def register_source(name):
    """Decorator to register a sample source class by type name."""
    def decorator(cls):
        SOURCE_REGISTRY[name] = cls
        logger.debug("Registered source type: %s -> %s", name, cls.__name__)
        return cls
    return decorator


def get_source_class(name):
    """Look up a registered source class. Raises KeyError for unknown types."""
    try:
        return SOURCE_REGISTRY[name]
    except KeyError:
        known = ", ".join(sorted(SOURCE_REGISTRY)) or "none"
        raise KeyError(f"unknown source type {name!r} (registered: {known})") from None
