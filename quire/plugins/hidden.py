"""Drop declarations marked ``@hidden`` in their docstring."""

import logging

from ..converter import ConverterEvent
from ..models import ProjectReflection, Reflection
from .base import BasePlugin
from .registry import register_plugin

_log = logging.getLogger(__name__)

HIDDEN_TAG = "@hidden"


def is_hidden(reflection: Reflection) -> bool:
    return any(line.strip() == HIDDEN_TAG for line in reflection.comment.splitlines())


@register_plugin("hidden")
class HiddenPlugin(BasePlugin):
    """Remove hidden reflections, with their members, before resolving."""

    @property
    def name(self) -> str:
        return "hidden"

    @property
    def description(self) -> str:
        return "Exclude declarations whose docstring has an @hidden line"

    def load(self, app) -> None:
        app.converter.hooks.on(ConverterEvent.RESOLVE_BEGIN, self.remove_hidden)

    @staticmethod
    def remove_hidden(project: ProjectReflection) -> None:
        hidden = [reflection for reflection in project.traverse() if is_hidden(reflection)]
        for reflection in hidden:
            if reflection.parent is not None:
                _log.debug("hiding %s", reflection.full_name)
                reflection.parent.remove_child(reflection)
