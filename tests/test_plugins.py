"""Tests for the plugin registry, built-in plugins and plugin loading."""

import sys
import types

import pytest

from quire import Application
from quire.converter import ConverterEvent
from quire.models import ProjectReflection, Reflection, ReflectionKind
from quire.plugins import (
    BasePlugin,
    clear_plugin_registry,
    discover_plugins,
    get_plugin_registry,
    register_plugin,
)
from quire.plugins.hidden import HiddenPlugin, is_hidden
from quire.renderer import Page, RenderContext


def make_context(**options) -> RenderContext:
    project = ProjectReflection(name="Demo")
    return RenderContext(Page("index.html", project, project, "index"), options)


def make_app(**options) -> Application:
    app = Application()
    app.bootstrap({"logger": "none", **options})
    return app


@pytest.fixture(autouse=True)
def restore_registry():
    yield
    clear_plugin_registry()
    discover_plugins()


class TestRegistry:
    """Decorator registry and discovery."""

    def test_discover_finds_builtins(self):
        clear_plugin_registry()
        discover_plugins()
        registry = get_plugin_registry()
        assert {"analytics", "footer", "hidden"} <= set(registry)
        assert all(issubclass(cls, BasePlugin) for cls in registry.values())

    def test_register_custom_plugin(self):
        @register_plugin("custom")
        class CustomPlugin(BasePlugin):
            name = "custom"
            description = "test plugin"

            def load(self, app):
                pass

        assert get_plugin_registry()["custom"] is CustomPlugin

    def test_register_rejects_non_plugin(self):
        with pytest.raises(TypeError):
            @register_plugin("bad")
            class NotAPlugin:
                pass

    def test_register_rejects_taken_name(self):
        discover_plugins()
        with pytest.raises(ValueError, match="footer"):
            @register_plugin("footer")
            class OtherFooter(BasePlugin):
                name = "footer"
                description = "shadows the built-in footer"

                def load(self, app):
                    pass

        assert get_plugin_registry()["footer"].__module__ == "quire.plugins.footer"

    def test_rediscover_keeps_builtins(self):
        discover_plugins()
        discover_plugins()
        assert {"analytics", "footer", "hidden"} <= set(get_plugin_registry())

    def test_get_registry_returns_copy(self):
        registry = get_plugin_registry()
        registry["fake"] = object
        assert "fake" not in get_plugin_registry()

    def test_clear(self):
        clear_plugin_registry()
        assert get_plugin_registry() == {}


class TestAnalyticsPlugin:
    """Google Analytics snippet."""

    def test_no_id_no_snippet(self):
        app = make_app(ga_site="example.com")
        assert app.renderer.hooks.emit("body.end", make_context(ga_id="", ga_site="example.com")) == ["", ""]

    def test_snippet(self):
        from quire.plugins.analytics import AnalyticsPlugin

        html = AnalyticsPlugin.render_snippet(make_context(ga_id="G-ABC", ga_site="auto"))
        assert "id=G-ABC" in html
        assert 'gtag("config", "G-ABC", {});' in html

    def test_site(self):
        from quire.plugins.analytics import AnalyticsPlugin

        html = AnalyticsPlugin.render_snippet(make_context(ga_id="G-ABC", ga_site="docs.example.com"))
        assert '{"cookie_domain": "docs.example.com"}' in html


class TestFooterPlugin:
    """Footer text, after default-order fragments."""

    def test_footer_after_analytics(self):
        app = make_app()
        fragments = app.renderer.hooks.emit("body.end", make_context(ga_id="G-1", footer="(c) <Demo>"))
        assert "googletagmanager" in fragments[0]
        assert fragments[1] == '<footer class="site-footer">(c) &lt;Demo&gt;</footer>'

    def test_no_footer(self):
        from quire.plugins.footer import FooterPlugin

        assert FooterPlugin.render_footer(make_context(footer="")) == ""


class TestHiddenPlugin:
    """@hidden removal."""

    def test_is_hidden(self):
        assert is_hidden(Reflection("x", ReflectionKind.FUNCTION, comment="Docs.\n\n@hidden"))
        assert not is_hidden(Reflection("x", ReflectionKind.FUNCTION, comment="Mentions @hidden inline."))

    def test_removes_nested(self):
        project = ProjectReflection(name="p")
        module = project.add_child(Reflection("m", ReflectionKind.MODULE))
        cls = module.add_child(Reflection("C", ReflectionKind.CLASS, comment="@hidden"))
        cls.add_child(Reflection("method", ReflectionKind.METHOD, comment="@hidden"))
        keep = module.add_child(Reflection("f", ReflectionKind.FUNCTION))

        HiddenPlugin.remove_hidden(project)
        assert module.children == [keep]

    def test_registered_on_resolve_begin(self):
        app = make_app()
        assert app.converter.hooks.has_listeners(ConverterEvent.RESOLVE_BEGIN)


class TestLoadPlugins:
    """Application.load_plugins."""

    def test_builtins_loaded(self):
        app = make_app()
        assert app.plugins == ["analytics", "footer", "hidden"]

    def test_module_plugin(self):
        module = types.ModuleType("quire_test_plugin")
        calls = []
        module.load = lambda app: calls.append(app)
        sys.modules["quire_test_plugin"] = module
        try:
            app = make_app(plugins=["quire_test_plugin"])
        finally:
            del sys.modules["quire_test_plugin"]
        assert calls == [app]
        assert "quire_test_plugin" in app.plugins
        assert not app.logger.has_errors()

    def test_module_without_load(self):
        sys.modules["quire_test_empty"] = types.ModuleType("quire_test_empty")
        try:
            app = make_app(plugins=["quire_test_empty"])
        finally:
            del sys.modules["quire_test_empty"]
        assert app.logger.has_errors()
        assert "quire_test_empty" not in app.plugins

    def test_missing_plugin(self):
        app = make_app(plugins=["quire_no_such_plugin_module"])
        assert app.logger.error_count == 1

    def test_plugin_load_once(self):
        app = make_app()
        app.load_plugins()
        assert app.renderer.hooks.listener_count("body.end") == 2
