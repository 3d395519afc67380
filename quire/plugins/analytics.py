"""Google Analytics tracking snippet."""

import html
import json
from urllib.parse import quote

from ..renderer import RenderContext, RendererHook
from .base import BasePlugin
from .registry import register_plugin

_SNIPPET = """<script async src="https://www.googletagmanager.com/gtag/js?id={query_id}"></script>
<script>
window.dataLayer = window.dataLayer || [];
function gtag() {{ dataLayer.push(arguments); }}
gtag("js", new Date());
gtag("config", {ga_id}, {config});
</script>"""


@register_plugin("analytics")
class AnalyticsPlugin(BasePlugin):
    """Add the tracking snippet to every page when ``ga_id`` is set."""

    @property
    def name(self) -> str:
        return "analytics"

    @property
    def description(self) -> str:
        return "Google Analytics snippet driven by the ga_id and ga_site options"

    def load(self, app) -> None:
        app.renderer.hooks.on(RendererHook.BODY_END, self.render_snippet)

    @staticmethod
    def render_snippet(context: RenderContext) -> str:
        ga_id = context.options.get("ga_id", "")
        if not ga_id:
            return ""

        site = context.options.get("ga_site", "auto")
        config = {} if site == "auto" else {"cookie_domain": site}
        return _SNIPPET.format(
            query_id=html.escape(quote(ga_id, safe="")),
            ga_id=json.dumps(ga_id),
            config=json.dumps(config, sort_keys=True),
        )
