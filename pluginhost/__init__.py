"""
pluginhost - Host-side lifecycle orchestrator for a single active plugin.

This is the main package that exports the public API.
"""

__version__ = "0.1.0"

# Import core components
from pluginhost.core.box import Box
from pluginhost.core import event_bus
from pluginhost.events import EventKind

# Create namespace objects for clean API using types.SimpleNamespace
from types import SimpleNamespace

# Event bus API namespace
event = SimpleNamespace(
    consumer=event_bus.consumer,
    start=event_bus.start,
    bus=event_bus.default_bus,
)

__all__ = [
    "__version__",
    "Box",
    "EventKind",
    "event",
]
