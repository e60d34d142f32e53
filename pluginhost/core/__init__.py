"""
pluginhost Core - messaging building blocks.

This module contains:
- Box: payload container for every event
- Event Bus: shared channel and per-node listener registries
"""

__all__ = []
