"""
Event kinds understood by the plugin host.

The set is closed: buses and nodes only accept members of EventKind.
"""

from enum import Enum


class EventKind(Enum):
    """Event kind enumeration."""

    # Lifecycle events published on the shared bus
    PLUGIN_LOADED = "plugin-loaded"
    PLUGIN_UNLOADED = "plugin-unloaded"
    SEARCH_UPDATED = "search-updated"

    # Requests raised by a plugin on its container
    DISPLAY_LOADER = "display-loader"
    HIDE_LOADER = "hide-loader"

    # Raised on the container and re-emitted on the shared bus
    TOAST = "toast"
