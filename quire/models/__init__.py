"""Project model."""

from .reflections import ProjectReflection, Reflection, ReflectionKind, SourceReference

__all__ = ["ProjectReflection", "Reflection", "ReflectionKind", "SourceReference"]
