"""Terminal palette for quire's console output."""

from dataclasses import dataclass

from rich.console import Console
from rich.text import Text


@dataclass(frozen=True)
class ColorPalette:
    """Core terminal color palette."""

    text_bright: str = "#e8e8f0"
    text: str = "#b8b8cc"
    text_dim: str = "#4a4a60"
    text_muted: str = "#363648"
    accent: str = "#00d4e5"
    info: str = "#5a9cf0"
    success: str = "#34d399"
    warning: str = "#e5c747"
    error: str = "#e55a6e"


DEFAULT_PALETTE = ColorPalette()

console = Console()


def render_summary(title: str, detail: str = "") -> None:
    """Print a one-line run summary."""
    line = Text(title, style=f"bold {DEFAULT_PALETTE.success}")
    if detail:
        line.append(f" . {detail}", style=f"dim {DEFAULT_PALETTE.text}")
    console.print(line)
