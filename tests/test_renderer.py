"""End-to-end rendering of examples/basic plus renderer hook behaviour."""

import re
from pathlib import Path

import pytest

from quire import Application, ProjectReflection
from quire.config import Options
from quire.logger import Logger
from quire.models import Reflection, ReflectionKind
from quire.renderer import Page, RenderContext, Renderer, RendererEvent, RendererHook

EXAMPLE = Path(__file__).resolve().parent.parent / "examples" / "basic"
SRC = EXAMPLE / "src"
SPECS = Path(__file__).resolve().parent / "renderer" / "specs"

EXPECTED_FILES = [
    "assets/highlight.css",
    "assets/style.css",
    "classes/shapes.colors.Color.html",
    "classes/shapes.geometry.Point.html",
    "index.html",
    "modules/shapes.colors.html",
    "modules/shapes.geometry.html",
    "modules/shapes.html",
]

# Token spans differ between Pygments releases; the highlighted text does not.
_PYGMENTS_TOKEN = re.compile(r'<span class="[a-z0-9]{1,3}(?: [a-z0-9]{1,3})*">([^<]*)</span>|<span></span>')
# Written by Pygments from the highlight_style option.
_PYGMENTS_FILES = {"assets/highlight.css"}


def get_file_index(base: Path) -> list[str]:
    return sorted(p.relative_to(base).as_posix() for p in base.rglob("*") if p.is_file())


def normalize(file: str, text: str) -> str:
    if file in _PYGMENTS_FILES:
        return "%PYGMENTS%"
    return _PYGMENTS_TOKEN.sub(r"\1", text.replace("\r", ""))


def compare_directories(a: Path, b: Path) -> None:
    a_files = get_file_index(a)
    b_files = get_file_index(b)
    assert a_files == b_files, f'Generated files differ between "{a}" and "{b}"'

    for file in a_files:
        a_src = normalize(file, (a / file).read_text(encoding="utf-8"))
        b_src = normalize(file, (b / file).read_text(encoding="utf-8"))
        assert b_src == a_src, f'File contents of "{file}" differ.'


@pytest.fixture(scope="module")
def app():
    app = Application()
    app.bootstrap({
        "logger": "none",
        "input_files": [str(SRC)],
        "readme": str(EXAMPLE / "README.md"),
        "ga_site": "foo.com",  # theme option that must not change output
        "name": "quire",
        "disable_sources": True,
    })
    return app


@pytest.fixture(scope="module")
def project(app):
    return app.convert()


class TestRenderBasicExample:
    """Convert and render examples/basic."""

    def test_converts(self, app, project):
        assert not app.logger.has_errors(), "Application.convert logged errors"
        assert isinstance(project, ProjectReflection)
        assert [m.name for m in project.modules] == ["shapes", "shapes.colors", "shapes.geometry"]

    def test_hidden_declaration_removed(self, project):
        geometry = project.get_child("shapes.geometry")
        assert geometry.get_child("distance") is not None
        assert geometry.get_child("fetch_point") is None

    def test_renders_expected_files(self, app, project, tmp_path):
        out = tmp_path / "out"
        app.generate_docs(project, out)
        assert not app.logger.has_errors()
        assert get_file_index(out) == EXPECTED_FILES

    def test_matches_expected_output(self, app, project, tmp_path):
        out = tmp_path / "out"
        app.generate_docs(project, out)
        compare_directories(SPECS, out)

    def test_output_is_reproducible(self, app, project, tmp_path):
        app.generate_docs(project, tmp_path / "first")
        app.generate_docs(project, tmp_path / "second")
        compare_directories(tmp_path / "first", tmp_path / "second")

    def test_page_contents(self, app, project, tmp_path):
        out = tmp_path / "out"
        app.generate_docs(project, out)

        index = (out / "index.html").read_text()
        assert "<title>quire</title>" in index
        assert "<h1>Shapes</h1>" in index
        assert 'href="modules/shapes.geometry.html"' in index
        assert 'href="assets/style.css"' in index

        point = (out / "classes" / "shapes.geometry.Point.html").read_text()
        assert "<title>shapes.geometry.Point | quire</title>" in point
        assert 'href="../assets/style.css"' in point
        assert 'id="translate"' in point
        assert 'id="_debug"' not in point
        assert "classmethod" in point

        module = (out / "modules" / "shapes.geometry.html").read_text()
        assert 'href="../classes/shapes.geometry.Point.html"' in module
        assert '<li class="current">' in module
        assert "fetch_point" not in module

    def test_no_sources_or_analytics(self, app, project, tmp_path):
        out = tmp_path / "out"
        app.generate_docs(project, out)
        for file in get_file_index(out):
            text = (out / file).read_text()
            assert "Defined in" not in text
            assert "googletagmanager" not in text


def make_project() -> ProjectReflection:
    project = ProjectReflection(name="Demo")
    module = project.add_child(Reflection("demo", ReflectionKind.MODULE, comment="Demo module."))
    module.add_child(Reflection("run", ReflectionKind.FUNCTION, signature="() -> None"))
    return project


def make_renderer() -> Renderer:
    return Renderer(Logger(), Options())


class TestRendererHooks:
    """Fragments from hook listeners land in the page."""

    def test_body_end_fragments_in_order(self, tmp_path):
        renderer = make_renderer()
        renderer.hooks.on(RendererHook.BODY_END, lambda context: "<!-- second -->", 1)
        renderer.hooks.on(RendererHook.BODY_END, lambda context: "<!-- first -->", -1)
        renderer.render(make_project(), tmp_path / "out")

        html = (tmp_path / "out" / "index.html").read_text()
        assert html.index("<!-- first -->") < html.index("<!-- second -->") < html.index("</body>")

    def test_each_slot(self, tmp_path):
        renderer = make_renderer()
        for hook in RendererHook:
            renderer.hooks.on(hook, lambda context, hook=hook: f"<!-- {hook.value} -->")
        renderer.render(make_project(), tmp_path / "out")

        html = (tmp_path / "out" / "modules" / "demo.html").read_text()
        positions = [html.index(f"<!-- {hook.value} -->") for hook in (
            RendererHook.HEAD_BEGIN,
            RendererHook.HEAD_END,
            RendererHook.BODY_BEGIN,
            RendererHook.NAVIGATION_BEGIN,
            RendererHook.NAVIGATION_END,
            RendererHook.CONTENT_BEGIN,
            RendererHook.CONTENT_END,
            RendererHook.BODY_END,
        )]
        assert positions == sorted(positions)

    def test_context(self, tmp_path):
        renderer = make_renderer()
        seen = []

        def listener(context: RenderContext) -> str:
            seen.append((context.page.url, context.relative_url("index.html")))
            return ""

        renderer.hooks.on(RendererHook.HEAD_END, listener)
        renderer.render(make_project(), tmp_path / "out")
        assert seen == [("index.html", "index.html"), ("modules/demo.html", "../index.html")]

    def test_once_hook_only_on_first_page(self, tmp_path):
        renderer = make_renderer()
        renderer.hooks.once(RendererHook.CONTENT_BEGIN, lambda context: "<p>banner</p>")
        renderer.render(make_project(), tmp_path / "out")

        assert "<p>banner</p>" in (tmp_path / "out" / "index.html").read_text()
        assert "<p>banner</p>" not in (tmp_path / "out" / "modules" / "demo.html").read_text()

    def test_page_end_can_rewrite_contents(self, tmp_path):
        renderer = make_renderer()

        def rewrite(page: Page) -> None:
            page.contents = page.contents.replace("Demo module.", "Rewritten.")

        renderer.events.on(RendererEvent.PAGE_END, rewrite)
        renderer.render(make_project(), tmp_path / "out")
        assert "Rewritten." in (tmp_path / "out" / "modules" / "demo.html").read_text()

    def test_render_events(self, tmp_path):
        renderer = make_renderer()
        seen = []
        renderer.events.on(RendererEvent.RENDER_BEGIN, lambda project, out: seen.append("begin"))
        renderer.events.on(RendererEvent.PAGE_BEGIN, lambda page: seen.append(page.url))
        renderer.events.on(RendererEvent.RENDER_END, lambda project, out: seen.append("end"))
        renderer.render(make_project(), tmp_path / "out")
        assert seen == ["begin", "index.html", "modules/demo.html", "end"]

    def test_failing_listener_skips_page(self, tmp_path):
        renderer = make_renderer()

        def fail(context):
            if context.page.url == "index.html":
                raise RuntimeError("listener broke")
            return ""

        renderer.hooks.on(RendererHook.BODY_END, fail)
        renderer.render(make_project(), tmp_path / "out")
        assert renderer.logger.error_count == 1
        assert not (tmp_path / "out" / "index.html").exists()
        assert (tmp_path / "out" / "modules" / "demo.html").exists()


class TestOutputDirectory:
    """Output directory preparation."""

    def test_stale_files_removed(self, tmp_path):
        out = tmp_path / "out"
        out.mkdir()
        (out / "stale.html").write_text("old")
        make_renderer().render(make_project(), out)
        assert not (out / "stale.html").exists()

    def test_refuses_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "keep.txt").write_text("keep")
        renderer = make_renderer()
        renderer.render(make_project(), tmp_path)
        assert renderer.logger.has_errors()
        assert (tmp_path / "keep.txt").exists()

    def test_refuses_input_directory(self, tmp_path):
        src = tmp_path / "src"
        src.mkdir()
        (src / "module.py").write_text("X = 1\n")
        options = Options()
        options.set_value("input_files", [str(src)])
        renderer = Renderer(Logger(), options)
        renderer.render(make_project(), src)
        assert renderer.logger.has_errors()
        assert (src / "module.py").exists()

    def test_refuses_parent_of_input_file(self, tmp_path):
        src = tmp_path / "src"
        src.mkdir()
        (src / "module.py").write_text("X = 1\n")
        options = Options()
        options.set_value("input_files", [str(src / "module.py")])
        renderer = Renderer(Logger(), options)
        renderer.render(make_project(), tmp_path)
        assert renderer.logger.has_errors()
        assert (src / "module.py").exists()

    def test_output_beside_inputs_is_allowed(self, tmp_path):
        src = tmp_path / "src"
        src.mkdir()
        options = Options()
        options.set_value("input_files", [str(src)])
        renderer = Renderer(Logger(), options)
        renderer.render(make_project(), tmp_path / "docs")
        assert not renderer.logger.has_errors()
        assert (tmp_path / "docs" / "index.html").exists()

    def test_refuses_file(self, tmp_path):
        target = tmp_path / "file.txt"
        target.write_text("x")
        renderer = make_renderer()
        renderer.render(make_project(), target)
        assert renderer.logger.has_errors()

    def test_unknown_highlight_style_warns(self, tmp_path):
        options = Options()
        options.set_value("highlight_style", "no-such-style")
        renderer = Renderer(Logger(), options)
        renderer.render(make_project(), tmp_path / "out")
        assert renderer.logger.has_warnings()
        assert (tmp_path / "out" / "assets" / "highlight.css").exists()


class TestNormalize:
    """Comparison ignores Pygments token markup only."""

    def test_strips_token_spans(self):
        text = '<pre><span></span><span class="n">x</span><span class="w"> </span><span class="o">=</span> 1\n</pre>'
        assert normalize("index.html", text) == "<pre>x = 1\n</pre>"

    def test_keeps_theme_spans(self):
        text = '<h3>parse <span class="flags">staticmethod</span></h3>'
        assert normalize("index.html", text) == text

    def test_highlight_css_compared_by_presence(self):
        assert normalize("assets/highlight.css", "a") == normalize("assets/highlight.css", "b")
