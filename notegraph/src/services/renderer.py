"""Rendering of note bodies into display HTML."""

from __future__ import annotations

from functools import lru_cache
import html
import re
from typing import List

from markdown_it import MarkdownIt
from mdit_py_plugins.dollarmath import dollarmath_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

CELL_QUOTES_PATTERN = re.compile(r'^"|"$')
FLASHCARD_TABLE_CLASS = "flashcard-table"


def _math_inline(tokens, idx, options, env) -> str:
    # TeX stays raw for client-side typesetting; only HTML-unsafe chars are escaped.
    return f'<span class="math math-inline">\\({html.escape(tokens[idx].content)}\\)</span>'


def _math_block(tokens, idx, options, env) -> str:
    body = html.escape((tokens[idx].content or "").strip("\n"))
    return f'<div class="math math-display">\\[\n{body}\n\\]</div>\n'


def build_markdown_parser() -> MarkdownIt:
    """
    Build the markdown pipeline shared by markdown and converted org notes.

    CommonMark with raw HTML passthrough, GFM tables, strikethrough and task
    lists, then ``$...$`` / ``$$...$$`` math. Content is authored by the
    corpus owner, so embedded HTML is trusted.
    """
    md = (
        MarkdownIt("commonmark", {"html": True})
        .enable("table")
        .enable("strikethrough")
        .use(tasklists_plugin)
        .use(dollarmath_plugin, allow_labels=False, double_inline=False)
    )
    md.renderer.rules["math_inline"] = _math_inline
    md.renderer.rules["math_block"] = _math_block
    return md


@lru_cache(maxsize=1)
def get_markdown_parser() -> MarkdownIt:
    return build_markdown_parser()


def render_markdown(text: str) -> str:
    """Render common-markup text to HTML."""
    return get_markdown_parser().render(text or "")


def _split_row(line: str) -> List[str]:
    return [CELL_QUOTES_PATTERN.sub("", cell.strip()) for cell in line.split(",")]


def render_csv_table(text: str) -> str:
    """
    Render flashcard CSV as an HTML table.

    The first line is the header row. Cells are split on every comma and
    lose surrounding whitespace and one pair of surrounding quotes; quoted
    commas are not supported.
    """
    stripped = (text or "").strip()
    if not stripped:
        return ""
    lines = stripped.split("\n")

    parts = [f'<table class="{FLASHCARD_TABLE_CLASS}">', "<thead><tr>"]
    parts.extend(f"<th>{header}</th>" for header in _split_row(lines[0]))
    parts.append("</tr></thead>")

    parts.append("<tbody>")
    for line in lines[1:]:
        parts.append("<tr>")
        parts.extend(f"<td>{cell}</td>" for cell in _split_row(line))
        parts.append("</tr>")
    parts.append("</tbody></table>")
    return "".join(parts)


__all__ = [
    "FLASHCARD_TABLE_CLASS",
    "build_markdown_parser",
    "get_markdown_parser",
    "render_csv_table",
    "render_markdown",
]
