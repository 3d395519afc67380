"""quire - API documentation generator for Python packages."""

__version__ = "0.1.0"

from .app import Application
from .models import ProjectReflection, Reflection, ReflectionKind
from .utils.hooks import EventHooks

__all__ = [
    "Application",
    "EventHooks",
    "ProjectReflection",
    "Reflection",
    "ReflectionKind",
]
