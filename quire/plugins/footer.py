"""Site footer text from the ``footer`` option."""

import html

from ..renderer import RenderContext, RendererHook
from .base import BasePlugin
from .registry import register_plugin

# After analytics and other default-order body.end fragments.
FOOTER_ORDER = 10


@register_plugin("footer")
class FooterPlugin(BasePlugin):
    """Append a footer to every page."""

    @property
    def name(self) -> str:
        return "footer"

    @property
    def description(self) -> str:
        return "Footer text at the bottom of each page"

    def load(self, app) -> None:
        app.renderer.hooks.on(RendererHook.BODY_END, self.render_footer, FOOTER_ORDER)

    @staticmethod
    def render_footer(context: RenderContext) -> str:
        text = context.options.get("footer", "")
        if not text:
            return ""
        return f'<footer class="site-footer">{html.escape(text)}</footer>'
