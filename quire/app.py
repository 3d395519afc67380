"""The Application ties options, logging, plugins, converter and renderer together.

Usage:
    app = Application()
    app.bootstrap({"input_files": ["src"], "name": "My Project"})
    project = app.convert()
    if project is not None:
        app.generate_docs(project, "docs")
"""

import importlib
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .config import (
    OptionsError,
    Options,
    find_default_config,
    load_config_file,
)
from .converter import Converter
from .logger import Logger, LogLevel, create_logger
from .models import ProjectReflection
from .plugins import discover_plugins, get_plugin_registry
from .renderer import Renderer

_log = logging.getLogger(__name__)

# Loaded on every bootstrap; each is inert until its options are set.
BUILTIN_PLUGINS = ("analytics", "footer", "hidden")

_LEVELS = {
    "verbose": LogLevel.VERBOSE,
    "info": LogLevel.INFO,
    "warn": LogLevel.WARN,
    "error": LogLevel.ERROR,
    "none": LogLevel.NONE,
}


class Application:
    """A documentation run."""

    def __init__(self):
        self.options = Options()
        self.logger: Logger = create_logger("console")
        self.converter = Converter(self.logger, self.options)
        self.renderer = Renderer(self.logger, self.options)
        self.plugins: list[str] = []

    def bootstrap(
        self,
        options: Optional[Dict[str, Any]] = None,
        config_path: Optional[Union[str, Path]] = None,
    ) -> None:
        """Apply configuration, create the logger and load plugins.

        Bad option names or values are reported through the logger rather
        than raised, so every problem is shown in one run.
        """
        problems = []
        values: Dict[str, Any] = {}

        path = Path(config_path) if config_path else find_default_config()
        if path is not None:
            try:
                values.update(load_config_file(path))
            except OptionsError as e:
                problems.append(str(e))
        values.update(options or {})

        for name, value in values.items():
            try:
                self.options.set_value(name, value)
            except OptionsError as e:
                problems.append(str(e))

        self._set_logger(create_logger(
            self.options.get_value("logger"),
            _LEVELS[self.options.get_value("log_level")],
        ))
        for problem in problems:
            self.logger.error(problem)

        self.load_plugins()

    def load_plugins(self) -> None:
        """Load built-in plugins and those named by the ``plugins`` option.

        An entry is either a registered plugin name or an importable module
        exposing ``load(app)``.
        """
        discover_plugins()
        registry = get_plugin_registry()

        for name in BUILTIN_PLUGINS + tuple(self.options.get_value("plugins")):
            if name in self.plugins:
                continue
            try:
                if name in registry:
                    registry[name]().load(self)
                else:
                    module = importlib.import_module(name)
                    loader = getattr(module, "load", None)
                    if not callable(loader):
                        raise AttributeError(f"module {name} has no load(app) function")
                    loader(self)
            except Exception as e:
                _log.debug("plugin %s failed to load", name, exc_info=True)
                self.logger.error(f"The plugin {name} could not be loaded: {e}")
                continue
            self.plugins.append(name)
            self.logger.verbose(f"Loaded plugin {name}")

    def convert(self) -> Optional[ProjectReflection]:
        """Build the project model from ``input_files``.

        Returns None if anything was logged as an error.
        """
        input_files = self.options.get_value("input_files")
        self.logger.verbose(f"Converting {len(input_files)} input(s)")
        try:
            project = self.converter.convert(input_files)
        except Exception as e:
            _log.debug("conversion failed", exc_info=True)
            self.logger.error(f"Conversion failed: {e}")
            return None

        if self.logger.has_errors():
            return None
        return project

    def generate_docs(self, project: ProjectReflection, out: Union[str, Path]) -> None:
        """Render ``project`` into ``out``."""
        self.logger.verbose(f"Rendering documentation to {out}")
        self.renderer.render(project, out)
        if not self.logger.has_errors():
            self.logger.info(f"Documentation generated at {out}")

    def _set_logger(self, logger: Logger) -> None:
        self.logger = logger
        self.converter.logger = logger
        self.renderer.logger = logger
