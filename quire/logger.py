"""User-facing diagnostics for a documentation run.

The Application reports problems through a Logger so it can tell afterwards
whether conversion or rendering produced errors. Internal debug output goes
through the standard ``logging`` module instead.
"""

from enum import IntEnum
from typing import Optional

from rich.console import Console
from rich.text import Text

from .theme import DEFAULT_PALETTE


class LogLevel(IntEnum):
    VERBOSE = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    NONE = 4


class Logger:
    """Counts errors and warnings. Subclasses decide where messages go."""

    def __init__(self, level: LogLevel = LogLevel.INFO):
        self.level = level
        self.error_count = 0
        self.warning_count = 0

    def has_errors(self) -> bool:
        return self.error_count > 0

    def has_warnings(self) -> bool:
        return self.warning_count > 0

    def reset_errors(self) -> None:
        self.error_count = 0

    def reset_warnings(self) -> None:
        self.warning_count = 0

    def error(self, message: str) -> None:
        self.log(message, LogLevel.ERROR)

    def warn(self, message: str) -> None:
        self.log(message, LogLevel.WARN)

    def info(self, message: str) -> None:
        self.log(message, LogLevel.INFO)

    def verbose(self, message: str) -> None:
        self.log(message, LogLevel.VERBOSE)

    def log(self, message: str, level: LogLevel) -> None:
        if level == LogLevel.ERROR:
            self.error_count += 1
        elif level == LogLevel.WARN:
            self.warning_count += 1
        if level >= self.level:
            self._write(message, level)

    def _write(self, message: str, level: LogLevel) -> None:
        """Output hook; the base logger only counts."""


_PREFIXES = {
    LogLevel.VERBOSE: ("dbg", DEFAULT_PALETTE.text_dim),
    LogLevel.INFO: ("inf", DEFAULT_PALETTE.info),
    LogLevel.WARN: ("wrn", DEFAULT_PALETTE.warning),
    LogLevel.ERROR: ("err", DEFAULT_PALETTE.error),
}


class ConsoleLogger(Logger):
    """Print messages to stderr with a coloured level prefix."""

    def __init__(
        self,
        level: LogLevel = LogLevel.INFO,
        console: Optional[Console] = None,
    ):
        super().__init__(level)
        self.console = console or Console(stderr=True)

    def _write(self, message: str, level: LogLevel) -> None:
        label, color = _PREFIXES[level]
        line = Text()
        line.append(f"{label} ", style=f"bold {color}")
        line.append("| ", style=f"dim {DEFAULT_PALETTE.text_muted}")
        line.append(message, style=color if level >= LogLevel.WARN else DEFAULT_PALETTE.text)
        self.console.print(line)


def create_logger(kind: str, level: LogLevel = LogLevel.INFO) -> Logger:
    """Build the logger named by the ``logger`` option."""
    if kind == "none":
        return Logger(LogLevel.NONE)
    return ConsoleLogger(level)
