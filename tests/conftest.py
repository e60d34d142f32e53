"""Shared fixtures for the pluginhost test suite."""

from typing import Any

import pytest

from pluginhost.core.event_bus import default_bus
from pluginhost.dom import Node, create_tag
from pluginhost.plugin import loader


@pytest.fixture(autouse=True)
def reset_globals():
    """Drop global bus subscriptions and cached plugin modules between tests."""
    default_bus().clear()
    loader.clear_cache()
    yield
    default_bus().clear()
    loader.clear_cache()


class RecordingPlugin:
    """Plugin that records every decorate() call and renders its data."""

    def __init__(self):
        self.calls: list[tuple[Any, ...]] = []

    def decorate(self, *args):
        self.calls.append(args)
        container: Node = args[0]
        text = str(args[1])
        if len(args) > 2:
            text = f"{text} / {args[2]}"
        container.append(create_tag("p", {"class": "entry"}, text))


@pytest.fixture
def plugin():
    return RecordingPlugin()
