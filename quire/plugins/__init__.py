"""Plugin system for extending quire."""

from .base import BasePlugin
from .registry import (
    clear_plugin_registry,
    discover_plugins,
    get_plugin_registry,
    register_plugin,
)

__all__ = [
    "BasePlugin",
    "clear_plugin_registry",
    "discover_plugins",
    "get_plugin_registry",
    "register_plugin",
]
