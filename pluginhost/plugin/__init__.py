"""
pluginhost Plugin System - Plugin capability and module loading.

This module handles:
- The Decoratable capability every plugin exposes
- Loading plugin modules from file paths
"""

from pluginhost.plugin.base import Decoratable
from pluginhost.plugin.loader import LoaderError, load_plugin_module

__all__ = ["Decoratable", "LoaderError", "load_plugin_module"]
