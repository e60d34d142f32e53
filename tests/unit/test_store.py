"""
Tests for the application store.
"""

import dataclasses

import pytest

from pluginhost.core.event_bus import EventBus
from pluginhost.events import EventKind
from pluginhost.store import AppStore, StoreError, StoreSnapshot


def _record(bus: EventBus) -> list:
    seen = []
    for kind in EventKind:
        bus.subscribe(kind, lambda kind, content: seen.append(kind))
    return seen


class TestAppStore:
    """Test store mutations and the events they publish."""

    def test_activate_publishes_loaded(self, plugin):
        bus = EventBus()
        seen = _record(bus)
        store = AppStore(bus)

        store.activate(plugin, "plugins/foo/foo.js", {"a": 1})

        assert seen == [EventKind.PLUGIN_LOADED]
        assert store.snapshot() == StoreSnapshot(
            active_plugin=plugin,
            plugin_data={"a": 1},
            active_plugin_path="plugins/foo/foo.js",
            search_query="",
        )

    def test_activate_rejects_plugin_without_decorate(self):
        store = AppStore(EventBus())
        with pytest.raises(StoreError, match="does not expose decorate"):
            store.activate(object(), "plugins/foo/foo.js")

    def test_deactivate_publishes_unloaded(self, plugin):
        bus = EventBus()
        store = AppStore(bus)
        store.activate(plugin, "plugins/foo/foo.js")
        seen = _record(bus)

        store.deactivate()

        assert seen == [EventKind.PLUGIN_UNLOADED]
        assert store.snapshot().active_plugin is None

    def test_search_publishes_updated(self):
        bus = EventBus()
        seen = _record(bus)
        store = AppStore(bus)

        store.set_search_query("abc")

        assert seen == [EventKind.SEARCH_UPDATED]
        assert store.snapshot().search_query == "abc"

    def test_snapshot_is_frozen(self, plugin):
        snapshot = AppStore(EventBus()).snapshot()
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.search_query = "x"

    def test_snapshot_taken_at_event_time(self, plugin):
        bus = EventBus()
        store = AppStore(bus)
        snapshots = []
        bus.subscribe(EventKind.SEARCH_UPDATED, lambda c: snapshots.append(store.snapshot()))

        store.set_search_query("a")
        store.set_search_query("b")

        assert [s.search_query for s in snapshots] == ["a", "b"]
