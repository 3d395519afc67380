"""HTML building blocks for the default theme.

Self-contained: no external CSS or JS. Every dynamic value passes through
``html.escape`` here or arrives as already-rendered markup.
"""

import html
from typing import Callable

from ..models import Reflection, ReflectionKind
from .markup import highlight_signature, render_comment, summary

STYLE_CSS = """* { box-sizing: border-box; }
body {
  margin: 0;
  font-family: -apple-system, "Segoe UI", Helvetica, Arial, sans-serif;
  color: #1f2328;
  background: #ffffff;
  line-height: 1.5;
}
a { color: #0969da; text-decoration: none; }
a:hover { text-decoration: underline; }
code, pre { font-family: "SFMono-Regular", Consolas, "Liberation Mono", monospace; }
code { background: #f3f4f6; padding: 0.1em 0.3em; border-radius: 4px; }
.site-header {
  padding: 0.8rem 1.5rem;
  background: #0c0c10;
  font-weight: 600;
}
.site-header a { color: #00d4e5; }
.container { display: flex; max-width: 1200px; margin: 0 auto; }
.site-nav { width: 260px; padding: 1.5rem 1rem; border-right: 1px solid #d0d7de; }
.site-nav ul { list-style: none; margin: 0; padding: 0; }
.site-nav li { margin: 0.2rem 0; }
.site-nav li.current > a { font-weight: 600; }
.content { flex: 1; padding: 1.5rem 2rem; min-width: 0; }
.breadcrumb { font-size: 0.85rem; color: #57606a; }
.kind { font-size: 0.75rem; text-transform: uppercase; color: #57606a; }
.member { border-top: 1px solid #d0d7de; padding: 0.8rem 0; }
.member h3 { margin: 0 0 0.3rem; }
.signature {
  font-family: "SFMono-Regular", Consolas, "Liberation Mono", monospace;
  background: #f6f8fa;
  padding: 0.4rem 0.6rem;
  border-radius: 6px;
  overflow-x: auto;
}
.flags { font-size: 0.75rem; color: #8250df; }
.source { font-size: 0.8rem; color: #57606a; }
.highlight pre { padding: 0.6rem; border-radius: 6px; overflow-x: auto; }
.site-footer { text-align: center; font-size: 0.8rem; color: #57606a; padding: 1rem; }
"""

# Section order on module and class pages.
MODULE_SECTIONS = (
    ("Classes", ReflectionKind.CLASS),
    ("Functions", ReflectionKind.FUNCTION),
    ("Variables", ReflectionKind.VARIABLE),
)
CLASS_SECTIONS = (
    ("Properties", ReflectionKind.PROPERTY),
    ("Methods", ReflectionKind.METHOD),
)

_KEYWORDS = {
    ReflectionKind.CLASS: "class ",
    ReflectionKind.FUNCTION: "def ",
    ReflectionKind.METHOD: "def ",
}


def escape(text: str) -> str:
    return html.escape(text, quote=True)


def render_signature(reflection: Reflection) -> str:
    keyword = _KEYWORDS.get(reflection.kind, "")
    if keyword and "async" in reflection.flags:
        keyword = "async " + keyword
    return (
        '<div class="signature">'
        f'{escape(keyword)}<strong>{escape(reflection.name)}</strong>'
        f'{highlight_signature(reflection.signature)}'
        "</div>"
    )


def render_flags(reflection: Reflection) -> str:
    flags = sorted(reflection.flags - {"async"})
    if not flags:
        return ""
    return f'<span class="flags">{escape(" ".join(flags))}</span>'


def render_source(reflection: Reflection) -> str:
    if reflection.source is None:
        return ""
    return (
        f'<p class="source">Defined in '
        f'{escape(reflection.source.file_name)}:{reflection.source.line}</p>'
    )


def render_member(reflection: Reflection) -> str:
    """A full member entry: signature, flags, docstring and source."""
    flags = render_flags(reflection)
    heading = escape(reflection.name) + (f" {flags}" if flags else "")
    parts = [
        f'<section class="member" id="{escape(reflection.name)}">',
        f"<h3>{heading}</h3>",
        render_signature(reflection),
        render_comment(reflection.comment),
        render_source(reflection),
        "</section>",
    ]
    return "\n".join(part for part in parts if part)


def render_link_item(reflection: Reflection, href: str) -> str:
    """A linked entry with the first paragraph of the docstring."""
    text = summary(reflection.comment)
    description = f" <span>{text}</span>" if text else ""
    return f'<li><a href="{escape(href)}">{escape(reflection.name)}</a>{description}</li>'


def render_sections(
    reflection: Reflection,
    sections: tuple,
    link: Callable[[Reflection], str],
) -> str:
    """Render member sections. Classes on module pages become links."""
    out = []
    for title, kind in sections:
        members = reflection.children_of_kind(kind)
        if not members:
            continue
        out.append(f"<h2>{escape(title)}</h2>")
        if kind == ReflectionKind.CLASS:
            items = "\n".join(render_link_item(member, link(member)) for member in members)
            out.append(f"<ul>\n{items}\n</ul>")
        else:
            out.extend(render_member(member) for member in members)
    return "\n".join(out)


def layout(
    title: str,
    head_begin: str,
    head_end: str,
    body_begin: str,
    body_end: str,
    header: str,
    navigation: str,
    content: str,
    asset_base: str,
) -> str:
    """Wrap a page body in the site chrome. Empty slots produce no lines."""
    lines = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        head_begin,
        '<meta charset="utf-8">',
        '<meta name="viewport" content="width=device-width, initial-scale=1">',
        f"<title>{escape(title)}</title>",
        f'<link rel="stylesheet" href="{escape(asset_base)}/style.css">',
        f'<link rel="stylesheet" href="{escape(asset_base)}/highlight.css">',
        head_end,
        "</head>",
        "<body>",
        body_begin,
        header,
        '<div class="container">',
        navigation,
        '<main class="content">',
        content,
        "</main>",
        "</div>",
        body_end,
        "</body>",
        "</html>",
    ]
    return "\n".join(line for line in lines if line) + "\n"
