"""Base plugin interface for extending quire."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..app import Application


class BasePlugin(ABC):
    """Abstract base class for all quire plugins."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique plugin identifier."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Short description of what this plugin does."""

    @abstractmethod
    def load(self, app: "Application") -> None:
        """Register listeners on the application's converter and renderer hooks."""
