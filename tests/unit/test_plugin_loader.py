"""
Tests for the plugin module loader.

This test suite covers:
1. Loading a module exposing decorate()
2. Caching and reloading
3. Error cases (missing file, broken module, no decorate)
"""

import sys
import tempfile
from pathlib import Path

import pytest

from pluginhost.dom import Node
from pluginhost.plugin import Decoratable
from pluginhost.plugin.loader import (
    LoaderError,
    is_module_cached,
    load_plugin_module,
    reload_plugin_module,
    unload_plugin_module,
)

PLUGIN_SOURCE = '''
from pluginhost.dom import create_tag

VERSION = {version}


def decorate(container, data, search_query=None):
    container.append(create_tag("p", text=f"{{data}}:{{search_query}}"))
'''


def _write(tmpdir: str, name: str, source: str) -> Path:
    path = Path(tmpdir) / name
    path.write_text(source, encoding="utf-8")
    return path


class TestLoadPluginModule:
    """Test loading plugin modules."""

    def test_load_and_decorate(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, "foo.py", PLUGIN_SOURCE.format(version=1))

            module = load_plugin_module(path)
            container = Node("div")
            module.decorate(container, "data", "abc")

        assert isinstance(module, Decoratable)
        assert container.children[0].text == "data:abc"

    def test_module_is_cached(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, "foo.py", PLUGIN_SOURCE.format(version=1))

            first = load_plugin_module(path)
            second = load_plugin_module(str(path))

            assert first is second
            assert is_module_cached(path)

    def test_reload_picks_up_changes(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, "foo.py", PLUGIN_SOURCE.format(version=1))
            assert load_plugin_module(path).VERSION == 1

            _write(tmpdir, "foo.py", PLUGIN_SOURCE.format(version=1000))
            assert load_plugin_module(path).VERSION == 1
            assert reload_plugin_module(path).VERSION == 1000

    def test_unload_removes_from_sys_modules(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, "foo.py", PLUGIN_SOURCE.format(version=1))
            module = load_plugin_module(path)

            unload_plugin_module(path)

            assert not is_module_cached(path)
            assert module.__name__ not in sys.modules


class TestLoaderErrors:
    """Test loader failures."""

    def test_missing_file(self):
        with pytest.raises(LoaderError, match="Entry point not found"):
            load_plugin_module("/nonexistent/plugin.py")

    def test_broken_module(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, "broken.py", "raise RuntimeError('nope')\n")

            with pytest.raises(LoaderError, match="Failed to load plugin module: nope"):
                load_plugin_module(path)
            assert not is_module_cached(path)

    def test_module_without_decorate(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, "empty.py", "VALUE = 1\n")

            with pytest.raises(LoaderError, match="does not define decorate"):
                load_plugin_module(path)
