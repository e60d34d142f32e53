"""
Lifecycle listener - drives the mount surface from bus events.

    PLUGIN_LOADED    -> create container, attach stylesheet, wire requests, decorate
    PLUGIN_UNLOADED  -> remove container
    SEARCH_UPDATED   -> clear container, decorate again with the search query

Handlers read a fresh store snapshot every time; the active plugin is never
cached between events. A snapshot without an active plugin is ignored.
Exceptions raised by decorate() are not caught here.
"""

from typing import Protocol

from pluginhost.core.box import Box
from pluginhost.core.event_bus import EventBus, Subscription
from pluginhost.dom import Node
from pluginhost.events import EventKind
from pluginhost.renderer.surface import MountSurface
from pluginhost.store import StoreSnapshot


class SnapshotSource(Protocol):
    def snapshot(self) -> StoreSnapshot:
        ...


class LifecycleListener:
    def __init__(
        self,
        surface: MountSurface,
        store: SnapshotSource,
        bus: EventBus,
        replace_on_activate: bool = True,
    ):
        self.surface = surface
        self.store = store
        self.bus = bus
        self.replace_on_activate = replace_on_activate
        self._subscriptions: list[Subscription] = []

    @property
    def connected(self) -> bool:
        return bool(self._subscriptions)

    def connect(self) -> None:
        """Subscribe to the lifecycle events. Calling twice is harmless."""
        if self.connected:
            return
        self._subscriptions = [
            self.bus.subscribe(EventKind.PLUGIN_LOADED, self.on_plugin_loaded),
            self.bus.subscribe(EventKind.PLUGIN_UNLOADED, self.on_plugin_unloaded),
            self.bus.subscribe(EventKind.SEARCH_UPDATED, self.on_search_updated),
        ]

    def disconnect(self) -> None:
        for subscription in self._subscriptions:
            self.bus.unsubscribe(subscription)
        self._subscriptions = []

    def on_plugin_loaded(self, content: Box) -> None:
        state = self.store.snapshot()
        if state.active_plugin is None:
            return

        if self.replace_on_activate:
            self.surface.remove_container()

        container = self.surface.create_container()
        self.surface.attach_stylesheet(state.active_plugin_path)
        self._wire_requests(container)

        state.active_plugin.decorate(container, state.plugin_data)

    def on_plugin_unloaded(self, content: Box) -> None:
        self.surface.remove_container()

    def on_search_updated(self, content: Box) -> None:
        container = self.surface.find_container()
        if container is None:
            return

        state = self.store.snapshot()
        # A stacked container can outlive the plugin that filled it
        if state.active_plugin is None:
            return

        self.surface.clear_container(container)
        state.active_plugin.decorate(container, state.plugin_data, state.search_query)

    def _wire_requests(self, container: Node) -> None:
        container.add_event_listener(EventKind.DISPLAY_LOADER, self.surface.show_loader)
        container.add_event_listener(EventKind.HIDE_LOADER, self.surface.hide_loader)
        container.add_event_listener(EventKind.TOAST, self.surface.forward_toast)
