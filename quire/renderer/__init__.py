"""HTML output."""

from .renderer import Renderer, RendererEvent
from .theme import DefaultTheme, Page, RenderContext, RendererHook

__all__ = [
    "DefaultTheme",
    "Page",
    "RenderContext",
    "Renderer",
    "RendererEvent",
    "RendererHook",
]
