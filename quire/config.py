"""Option handling for quire.

Options come from three places, later ones winning: built-in defaults, a
YAML config file (``quire.yaml`` in the working directory unless another
path is given) and values passed to ``Application.bootstrap`` or the CLI.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml


DEFAULT_CONFIG_NAME = "quire.yaml"

DEFAULT_OPTIONS: Dict[str, Any] = {
    "name": "",
    "input_files": [],
    "out": "docs",
    "readme": "",
    "exclude_private": True,
    "disable_sources": False,
    "plugins": [],
    "ga_id": "",
    "ga_site": "auto",
    "footer": "",
    "highlight_style": "default",
    "logger": "console",
    "log_level": "info",
}

_LOGGERS = ("console", "none")
_LOG_LEVELS = ("verbose", "info", "warn", "error", "none")


class OptionsError(ValueError):
    """An option name or value was rejected."""


class Options:
    """Typed option store seeded from DEFAULT_OPTIONS."""

    def __init__(self):
        self._values: Dict[str, Any] = copy.deepcopy(DEFAULT_OPTIONS)
        self._set: set[str] = set()

    def get_value(self, name: str) -> Any:
        if name not in self._values:
            raise OptionsError(f"Unknown option '{name}'")
        return self._values[name]

    def set_value(self, name: str, value: Any) -> None:
        """Set an option after checking its name and type.

        Raises:
            OptionsError: unknown name, or a value of the wrong type.
        """
        if name not in DEFAULT_OPTIONS:
            raise OptionsError(f"Unknown option '{name}'")
        self._values[name] = _coerce(name, value)
        self._set.add(name)

    def set_values(self, values: Dict[str, Any]) -> None:
        for name, value in values.items():
            self.set_value(name, value)

    def is_set(self, name: str) -> bool:
        return name in self._set

    def snapshot(self) -> Dict[str, Any]:
        """Return a deep copy of all current values."""
        return copy.deepcopy(self._values)

    def reset(self) -> None:
        self._values = copy.deepcopy(DEFAULT_OPTIONS)
        self._set.clear()


def _coerce(name: str, value: Any) -> Any:
    default = DEFAULT_OPTIONS[name]

    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise OptionsError(f"Option '{name}' expects true or false, got {value!r}")
        return value

    if isinstance(default, list):
        if isinstance(value, (str, Path)):
            value = [value]
        if not isinstance(value, (list, tuple)):
            raise OptionsError(f"Option '{name}' expects a list, got {value!r}")
        return [str(item) for item in value]

    if isinstance(value, Path):
        value = str(value)
    if not isinstance(value, str):
        raise OptionsError(f"Option '{name}' expects a string, got {value!r}")

    if name == "logger" and value not in _LOGGERS:
        raise OptionsError(f"Option 'logger' must be one of {', '.join(_LOGGERS)}")
    if name == "log_level" and value not in _LOG_LEVELS:
        raise OptionsError(f"Option 'log_level' must be one of {', '.join(_LOG_LEVELS)}")
    return value


def resolve_env_var(value: Any) -> Any:
    """Resolve environment variable references like ${VAR_NAME}."""
    if not isinstance(value, str):
        return value
    if not value.startswith("${") or not value.endswith("}"):
        return value

    var_name = value[2:-1]
    return os.getenv(var_name, "")


def load_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read option values from a YAML file.

    Relative ``input_files`` and ``readme`` entries are resolved against the
    config file's directory.

    Raises:
        OptionsError: the file is unreadable, not YAML, or not a mapping.
    """
    config_path = Path(path).expanduser()
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except OSError as e:
        raise OptionsError(f"Could not read config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise OptionsError(f"Invalid YAML in {config_path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise OptionsError(f"Config file {config_path} must contain a mapping")

    base = config_path.parent
    data = {}
    for key, value in content.items():
        if isinstance(value, list):
            value = [resolve_env_var(item) for item in value]
        else:
            value = resolve_env_var(value)
        if key == "input_files":
            items = value if isinstance(value, list) else [value]
            value = [str(base / item) for item in items]
        elif key == "readme" and value:
            value = str(base / value)
        data[key] = value
    return data


def find_default_config(start_dir: Optional[str] = None) -> Optional[Path]:
    """Return ``quire.yaml`` in ``start_dir`` (default: cwd) if it exists."""
    candidate = Path(start_dir or ".").resolve() / DEFAULT_CONFIG_NAME
    return candidate if candidate.is_file() else None
