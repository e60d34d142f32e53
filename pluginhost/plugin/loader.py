"""
Dynamic Plugin Loader.

This module loads plugin modules from file paths.

Key features:
- importlib integration for dynamic loading
- Module caching keyed by resolved path
- Reload support for development
- decorate() capability check
"""

import hashlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType

from pluginhost.plugin.base import Decoratable


class LoaderError(Exception):
    """Base exception for loader-related errors."""

    pass


# Module cache: resolved path -> module
_module_cache: dict[Path, ModuleType] = {}


def _module_name(entry_point: Path) -> str:
    digest = hashlib.sha1(str(entry_point).encode("utf-8")).hexdigest()[:12]
    return f"pluginhost_plugin_{entry_point.stem}_{digest}"


def load_plugin_module(path: Path | str) -> ModuleType:
    """
    Load a plugin module dynamically.

    Args:
        path: Path to the plugin's Python file

    Returns:
        Loaded module exposing decorate()

    Raises:
        LoaderError: If the file is missing, fails to execute or lacks decorate()
    """
    entry_point = Path(path).resolve()

    if not entry_point.exists():
        raise LoaderError(f"Entry point not found: {entry_point}")

    if entry_point in _module_cache:
        return _module_cache[entry_point]

    module_name = _module_name(entry_point)
    try:
        spec = importlib.util.spec_from_file_location(module_name, entry_point)

        if spec is None or spec.loader is None:
            raise LoaderError(f"Failed to create module spec for {entry_point}")

        module = importlib.util.module_from_spec(spec)

        # Add to sys.modules before execution
        sys.modules[module_name] = module
        spec.loader.exec_module(module)

    except Exception as e:
        sys.modules.pop(module_name, None)
        if isinstance(e, LoaderError):
            raise
        raise LoaderError(f"Failed to load plugin module: {e}") from e

    if not isinstance(module, Decoratable) or not callable(module.decorate):
        sys.modules.pop(module_name, None)
        raise LoaderError(f"Plugin module {entry_point} does not define decorate()")

    _module_cache[entry_point] = module
    return module


def reload_plugin_module(path: Path | str) -> ModuleType:
    """Reload a plugin module (for development)."""
    unload_plugin_module(path)
    return load_plugin_module(path)


def unload_plugin_module(path: Path | str) -> None:
    """Unload a plugin module and clear it from cache."""
    entry_point = Path(path).resolve()
    _module_cache.pop(entry_point, None)
    sys.modules.pop(_module_name(entry_point), None)


def is_module_cached(path: Path | str) -> bool:
    return Path(path).resolve() in _module_cache


def clear_cache() -> None:
    """Clear all cached plugin modules."""
    for entry_point in list(_module_cache.keys()):
        unload_plugin_module(entry_point)
