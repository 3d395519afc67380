"""Write a project model to an output directory through the theme."""

import logging
import shutil
from enum import Enum
from pathlib import Path
from typing import Union

from ..config import Options
from ..logger import Logger
from ..models import ProjectReflection
from ..utils.hooks import EventHooks
from .theme import DefaultTheme, Page, RendererHook

_log = logging.getLogger(__name__)


class RendererEvent(str, Enum):
    """Lifecycle notifications around a render.

    render_begin(project, out_dir) / render_end(project, out_dir)
    page.begin(page) / page.end(page); page.end may rewrite page.contents
    """

    RENDER_BEGIN = "render_begin"
    RENDER_END = "render_end"
    PAGE_BEGIN = "page.begin"
    PAGE_END = "page.end"


class Renderer:
    """Own the theme and the two hook registries used while rendering."""

    def __init__(self, logger: Logger, options: Options):
        self.logger = logger
        self.options = options
        self.hooks: EventHooks[RendererHook, str] = EventHooks()
        self.events: EventHooks[RendererEvent, None] = EventHooks()
        self.theme = DefaultTheme(self)

    def render(self, project: ProjectReflection, out_dir: Union[str, Path]) -> None:
        """Render every page of ``project`` into a fresh ``out_dir``.

        A failing page is logged as an error and skipped; the rest of the
        site is still written.
        """
        out = Path(out_dir)
        if not self.prepare_output_directory(out):
            return

        self.events.emit(RendererEvent.RENDER_BEGIN, project, out)
        self.theme.write_assets(out)

        pages = self.theme.get_pages(project)
        for page in pages:
            self.render_page(page, out)

        self.events.emit(RendererEvent.RENDER_END, project, out)
        _log.debug("rendered %d pages to %s", len(pages), out)

    def render_page(self, page: Page, out: Path) -> bool:
        try:
            self.events.emit(RendererEvent.PAGE_BEGIN, page)
            page.contents = self.theme.render(page)
            self.events.emit(RendererEvent.PAGE_END, page)
        except Exception as e:
            _log.debug("page %s failed", page.url, exc_info=True)
            self.logger.error(f"Failed to render {page.url}: {e}")
            return False

        target = out / page.url
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(page.contents, encoding="utf-8")
        return True

    def prepare_output_directory(self, out: Path) -> bool:
        """Remove and recreate ``out``.

        Refuses to clean the working directory, any of its parents, or a
        directory that is or contains one of the ``input_files``.
        """
        resolved = out.resolve()
        cwd = Path.cwd().resolve()
        if resolved == cwd or resolved in cwd.parents:
            self.logger.error(
                f"Refusing to clean output directory {out}: it contains the working directory."
            )
            return False

        for entry in self.options.get_value("input_files"):
            source = Path(entry).expanduser().resolve()
            if resolved == source or resolved in source.parents:
                self.logger.error(
                    f"Refusing to clean output directory {out}: it contains the input {entry}."
                )
                return False

        if resolved.exists():
            if not resolved.is_dir():
                self.logger.error(f"Output path {out} exists and is not a directory.")
                return False
            shutil.rmtree(resolved)
        resolved.mkdir(parents=True)
        return True
