"""
pluginhost Renderer - mounts the active plugin into a render root.

This module contains:
- MountSurface: container, stylesheet and loader bookkeeping
- LifecycleListener: bus events -> surface operations
- PluginRenderer: the host component tying both together
"""

from pluginhost.renderer.component import PluginRenderer, build_host
from pluginhost.renderer.listener import LifecycleListener
from pluginhost.renderer.surface import MountSurface, derive_stylesheet_href

__all__ = [
    "LifecycleListener",
    "MountSurface",
    "PluginRenderer",
    "build_host",
    "derive_stylesheet_href",
]
