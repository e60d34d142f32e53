"""
Application store - holds the active plugin and the current search query.

The store is the single writer of plugin selection state. Every mutation
publishes the matching lifecycle event on the store's bus; handlers read a
StoreSnapshot taken at the moment the event fires.
"""

from dataclasses import dataclass
from typing import Any

from pluginhost.core.event_bus import EventBus, default_bus
from pluginhost.events import EventKind


class StoreError(Exception):
    """Base exception for store errors."""

    pass


@dataclass(frozen=True)
class StoreSnapshot:
    """
    Read-only view of the store at one point in time.

    Attributes:
        active_plugin: Object exposing decorate(), or None when nothing is active
        plugin_data: Opaque payload handed to decorate()
        active_plugin_path: Locator of the plugin module
        search_query: Current search query
    """

    active_plugin: Any = None
    plugin_data: Any = None
    active_plugin_path: str = ""
    search_query: str = ""


class AppStore:
    """
    Mutable application store.

    Example:
        store = AppStore(bus)
        store.activate(plugin, "plugins/foo/foo.js", data)
        store.set_search_query("abc")
        store.deactivate()
    """

    def __init__(self, bus: EventBus | None = None):
        self.bus = bus if bus is not None else default_bus()
        self.active_plugin: Any = None
        self.plugin_data: Any = None
        self.active_plugin_path: str = ""
        self.search_query: str = ""

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            active_plugin=self.active_plugin,
            plugin_data=self.plugin_data,
            active_plugin_path=self.active_plugin_path,
            search_query=self.search_query,
        )

    def activate(self, plugin: Any, path: str, data: Any = None) -> None:
        """
        Select a plugin and announce it.

        Args:
            plugin: Object or module exposing decorate()
            path: Locator of the plugin module (used for its stylesheet)
            data: Payload handed to decorate()

        Raises:
            StoreError: If plugin does not expose a callable decorate
        """
        if not callable(getattr(plugin, "decorate", None)):
            raise StoreError(f"Plugin {plugin!r} does not expose decorate()")

        self.active_plugin = plugin
        self.active_plugin_path = path
        self.plugin_data = data
        self.bus.dispatch(EventKind.PLUGIN_LOADED)

    def deactivate(self) -> None:
        """Clear the plugin selection and announce it."""
        self.active_plugin = None
        self.plugin_data = None
        self.active_plugin_path = ""
        self.bus.dispatch(EventKind.PLUGIN_UNLOADED)

    def set_search_query(self, query: str) -> None:
        self.search_query = query
        self.bus.dispatch(EventKind.SEARCH_UPDATED)
