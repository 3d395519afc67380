"""Named plugins that ``Application.load_plugins`` can load by name.

The built-in plugins (analytics, footer, hidden) live in this package and
register themselves with ``@register_plugin`` when imported. Names given in
the ``plugins`` option are looked up here first and fall back to importing a
module with a ``load(app)`` function.
"""

import importlib
import pkgutil
import sys
from typing import Dict, Type

from .base import BasePlugin

_REGISTRY: Dict[str, Type[BasePlugin]] = {}

# Support modules of this package that hold no plugin.
_NOT_PLUGINS = ("base", "registry", "__init__")


def register_plugin(name: str):
    """Register a plugin class under ``name``.

    Usage:
        @register_plugin("analytics")
        class AnalyticsPlugin(BasePlugin):
            ...

    Registering the same class again (as happens when its module is
    reloaded) replaces the old entry. A name claimed by a different class
    raises ValueError, so one plugin can't silently shadow another.
    """
    def decorator(cls: Type[BasePlugin]):
        if not issubclass(cls, BasePlugin):
            raise TypeError(f"{cls.__name__} must be a subclass of BasePlugin")
        existing = _REGISTRY.get(name)
        if existing is not None and _qualified_name(existing) != _qualified_name(cls):
            raise ValueError(
                f"Plugin name '{name}' is already used by {_qualified_name(existing)}"
            )
        _REGISTRY[name] = cls
        return cls
    return decorator


def discover_plugins() -> None:
    """Import the built-in plugin modules so their decorators run.

    Modules that are already imported get reloaded, which restores their
    entries after clear_plugin_registry().
    """
    package = importlib.import_module("quire.plugins")
    for _importer, module_name, _is_pkg in pkgutil.iter_modules(package.__path__):
        if module_name in _NOT_PLUGINS:
            continue
        fqn = f"quire.plugins.{module_name}"
        if fqn in sys.modules:
            importlib.reload(sys.modules[fqn])
        else:
            importlib.import_module(fqn)


def get_plugin_registry() -> Dict[str, Type[BasePlugin]]:
    """Return a copy of the name -> plugin class mapping."""
    return dict(_REGISTRY)


def clear_plugin_registry() -> None:
    _REGISTRY.clear()


def _qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"
