"""Default theme: decides which pages exist and renders them to HTML.

Plugins add markup through the renderer's hooks. Every hook listener is
called with the page's RenderContext and returns an HTML fragment:

    head.begin / head.end
    body.begin / body.end
    navigation.begin / navigation.end
    content.begin / content.end
"""

import posixpath
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional

from pygments.util import ClassNotFound

from ..models import ProjectReflection, Reflection, ReflectionKind
from . import templates
from .markup import highlight_css, render_comment

if TYPE_CHECKING:
    from .renderer import Renderer


class RendererHook(str, Enum):
    """Points in a page where plugins can insert markup."""

    HEAD_BEGIN = "head.begin"
    HEAD_END = "head.end"
    BODY_BEGIN = "body.begin"
    BODY_END = "body.end"
    NAVIGATION_BEGIN = "navigation.begin"
    NAVIGATION_END = "navigation.end"
    CONTENT_BEGIN = "content.begin"
    CONTENT_END = "content.end"


@dataclass(eq=False)
class Page:
    """One output file. ``contents`` is filled in during rendering."""

    url: str
    model: Reflection
    project: ProjectReflection
    template: str
    contents: str = ""


@dataclass
class RenderContext:
    """What hook listeners receive for the page being rendered."""

    page: Page
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def project(self) -> ProjectReflection:
        return self.page.project

    def relative_url(self, url: str) -> str:
        """Path from the current page to another output file."""
        start = posixpath.dirname(self.page.url) or "."
        return posixpath.relpath(url, start)


class DefaultTheme:
    """Maps the project to pages and renders them with ``templates``."""

    def __init__(self, renderer: "Renderer"):
        self.renderer = renderer

    @staticmethod
    def get_url(reflection: Reflection) -> Optional[str]:
        """Page URL for reflections that get their own page."""
        if reflection.kind == ReflectionKind.MODULE:
            return f"modules/{reflection.full_name}.html"
        if reflection.kind == ReflectionKind.CLASS:
            return f"classes/{reflection.full_name}.html"
        return None

    def get_pages(self, project: ProjectReflection) -> list[Page]:
        pages = [Page("index.html", project, project, "index")]
        for reflection in project.traverse():
            url = self.get_url(reflection)
            if url is not None:
                pages.append(Page(url, reflection, project, "reflection"))
        return pages

    def write_assets(self, out_dir: Path) -> None:
        assets = out_dir / "assets"
        assets.mkdir(parents=True, exist_ok=True)
        (assets / "style.css").write_text(templates.STYLE_CSS, encoding="utf-8")

        style = self.renderer.options.get_value("highlight_style")
        try:
            css = highlight_css(style)
        except ClassNotFound:
            self.renderer.logger.warn(
                f"Unknown highlight style '{style}', using 'default'."
            )
            css = highlight_css("default")
        (assets / "highlight.css").write_text(css, encoding="utf-8")

    def render(self, page: Page) -> str:
        context = RenderContext(page, self.renderer.options.snapshot())

        if page.template == "index":
            content = self._index_content(context)
            title = self._project_name(page.project)
        else:
            content = self._reflection_content(context)
            title = f"{page.model.full_name} | {self._project_name(page.project)}"

        return templates.layout(
            title=title,
            head_begin=self._hook(RendererHook.HEAD_BEGIN, context),
            head_end=self._hook(RendererHook.HEAD_END, context),
            body_begin=self._hook(RendererHook.BODY_BEGIN, context),
            body_end=self._hook(RendererHook.BODY_END, context),
            header=self._header(context),
            navigation=self._navigation(context),
            content="\n".join(part for part in (
                self._hook(RendererHook.CONTENT_BEGIN, context),
                content,
                self._hook(RendererHook.CONTENT_END, context),
            ) if part),
            asset_base=context.relative_url("assets"),
        )

    def _hook(self, name: RendererHook, context: RenderContext) -> str:
        fragments = self.renderer.hooks.emit(name, context)
        return "\n".join(fragment for fragment in fragments if fragment)

    @staticmethod
    def _project_name(project: ProjectReflection) -> str:
        return project.name or "Documentation"

    def _header(self, context: RenderContext) -> str:
        name = templates.escape(self._project_name(context.project))
        href = templates.escape(context.relative_url("index.html"))
        return f'<header class="site-header"><a href="{href}">{name}</a></header>'

    def _navigation(self, context: RenderContext) -> str:
        current = context.page.model
        while current is not None and current.kind not in (
            ReflectionKind.MODULE, ReflectionKind.PROJECT,
        ):
            current = current.parent

        items = []
        for module in context.project.modules:
            href = templates.escape(context.relative_url(self.get_url(module)))
            css = ' class="current"' if module is current else ""
            items.append(f'<li{css}><a href="{href}">{templates.escape(module.name)}</a></li>')

        parts = [
            '<nav class="site-nav">',
            self._hook(RendererHook.NAVIGATION_BEGIN, context),
            "<ul>",
            *items,
            "</ul>",
            self._hook(RendererHook.NAVIGATION_END, context),
            "</nav>",
        ]
        return "\n".join(part for part in parts if part)

    def _index_content(self, context: RenderContext) -> str:
        project = context.project
        parts = []
        if project.readme:
            parts.append(render_comment(project.readme))
        else:
            parts.append(f"<h1>{templates.escape(self._project_name(project))}</h1>")

        if project.modules:
            items = "\n".join(
                templates.render_link_item(module, context.relative_url(self.get_url(module)))
                for module in project.modules
            )
            parts.append(f"<h2>Modules</h2>\n<ul>\n{items}\n</ul>")
        return "\n".join(parts)

    def _reflection_content(self, context: RenderContext) -> str:
        model = context.page.model
        parts = [
            self._breadcrumb(context),
            f'<h1><span class="kind">{model.kind.value}</span> {templates.escape(model.name)}</h1>',
        ]
        if model.kind == ReflectionKind.CLASS:
            parts.append(templates.render_signature(model))
        parts.append(render_comment(model.comment))
        parts.append(templates.render_source(model))

        sections = (
            templates.MODULE_SECTIONS if model.kind == ReflectionKind.MODULE
            else templates.CLASS_SECTIONS
        )
        parts.append(templates.render_sections(
            model,
            sections,
            lambda reflection: context.relative_url(self.get_url(reflection)),
        ))
        return "\n".join(part for part in parts if part)

    def _breadcrumb(self, context: RenderContext) -> str:
        crumbs = []
        current = context.page.model.parent
        while current is not None:
            url = "index.html" if current.kind == ReflectionKind.PROJECT else self.get_url(current)
            name = self._project_name(current) if current.kind == ReflectionKind.PROJECT else current.name
            crumbs.append(
                f'<a href="{templates.escape(context.relative_url(url))}">{templates.escape(name)}</a>'
            )
            current = current.parent
        return f'<p class="breadcrumb">{" / ".join(reversed(crumbs))}</p>'
