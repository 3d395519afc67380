"""Docstring and README markup to HTML.

Handles a small Markdown subset: ``#`` headers, ``-``/``*`` bullet lists,
paragraphs, inline code and fenced code blocks. Code is highlighted with
pygments.
"""

import html
import re

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import PythonLexer, TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

_FENCE = re.compile(r"^```\s*([\w+-]*)\s*$")
_HEADER = re.compile(r"^(#{1,6})\s+(.*)")
_BULLET = re.compile(r"^[-*+]\s+(.*)")
# ``rst`` literals or `markdown` code spans
_INLINE_CODE = re.compile(r"``(.+?)``|`([^`]+)`")
_BOLD = re.compile(r"\*\*(.+?)\*\*")


def render_inline(text: str) -> str:
    """Escape ``text`` and apply inline code and bold markup."""
    escaped = html.escape(text, quote=False)
    escaped = _INLINE_CODE.sub(_code_span, escaped)
    return _BOLD.sub(r"<strong>\1</strong>", escaped)


def _code_span(match: re.Match) -> str:
    return f"<code>{match.group(1) or match.group(2)}</code>"


def highlight_code(code: str, language: str = "python") -> str:
    """Highlight a code block; unknown languages are rendered as plain text."""
    try:
        lexer = get_lexer_by_name(language) if language else PythonLexer()
    except ClassNotFound:
        lexer = TextLexer()
    return highlight(code, lexer, HtmlFormatter(cssclass="highlight")).rstrip("\n")


def highlight_signature(signature: str) -> str:
    """Highlight a parameter list or annotation without a wrapping block."""
    if not signature:
        return ""
    return highlight(signature, PythonLexer(), HtmlFormatter(nowrap=True)).rstrip("\n")


def highlight_css(style: str = "default") -> str:
    """Return pygments CSS rules for the ``.highlight`` class.

    Raises:
        pygments.util.ClassNotFound: ``style`` is not a pygments style.
    """
    return HtmlFormatter(style=style).get_style_defs(".highlight") + "\n"


def summary(text: str) -> str:
    """First paragraph of a docstring, as inline HTML."""
    first = text.strip().split("\n\n", 1)[0]
    return render_inline(" ".join(line.strip() for line in first.splitlines()))


def render_comment(text: str, header_offset: int = 0) -> str:
    """Convert a docstring or README to block-level HTML.

    Args:
        text: The raw comment text.
        header_offset: Added to each header level, so README headers can sit
            below the page title. Levels are capped at 6.
    """
    blocks: list[str] = []
    paragraph: list[str] = []
    bullets: list[str] = []
    code: list[str] = []
    language = ""
    in_code = False

    def flush() -> None:
        if paragraph:
            blocks.append(f"<p>{render_inline(' '.join(paragraph))}</p>")
            paragraph.clear()
        if bullets:
            items = "".join(f"<li>{render_inline(item)}</li>" for item in bullets)
            blocks.append(f"<ul>{items}</ul>")
            bullets.clear()

    for line in text.splitlines():
        stripped = line.strip()

        if in_code:
            if stripped == "```":
                blocks.append(highlight_code("\n".join(code), language))
                code.clear()
                in_code = False
            else:
                code.append(line)
            continue

        fence = _FENCE.match(stripped)
        if fence:
            flush()
            in_code = True
            language = fence.group(1)
            continue

        if not stripped:
            flush()
            continue

        header = _HEADER.match(stripped)
        if header:
            flush()
            level = min(len(header.group(1)) + header_offset, 6)
            blocks.append(f"<h{level}>{render_inline(header.group(2))}</h{level}>")
            continue

        bullet = _BULLET.match(stripped)
        if bullet:
            if paragraph:
                flush()
            bullets.append(bullet.group(1))
            continue

        if bullets:
            # continuation of the previous list item
            bullets[-1] += " " + stripped
        else:
            paragraph.append(stripped)

    # unterminated fence
    if in_code:
        blocks.append(highlight_code("\n".join(code), language))
    flush()
    return "\n".join(blocks)
