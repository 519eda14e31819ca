"""Per-format parsing behavior, keyed by :class:`NoteFormat`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from ..models.note import ExtractedMetadata, NoteFormat
from .links import extract_markdown_links, extract_org_links
from .metadata import extract_frontmatter, extract_org_properties
from .org import org_to_markdown
from .renderer import render_csv_table, render_markdown

FLASHCARD_TAGS = ("flashcards",)


@dataclass(frozen=True)
class FormatHandler:
    """
    The parsing steps for one source format.

    ``extract`` splits raw text into metadata and body, ``normalize`` turns
    the body into the stored content, ``links`` sees both the raw text and
    the body, and ``render`` turns the content into HTML.
    """

    extract: Callable[[str], Tuple[ExtractedMetadata, str]]
    normalize: Callable[[str], str]
    links: Callable[[str, str], List[str]]
    render: Callable[[str], str]


def _flashcard_metadata(raw: str) -> Tuple[ExtractedMetadata, str]:
    # CSV has no header block; id and title come from the path fallbacks.
    return ExtractedMetadata(tags=list(FLASHCARD_TAGS)), raw


def _identity(text: str) -> str:
    return text


FORMAT_HANDLERS: Dict[NoteFormat, FormatHandler] = {
    NoteFormat.MARKDOWN: FormatHandler(
        extract=extract_frontmatter,
        normalize=_identity,
        links=lambda raw, body: extract_markdown_links(body),
        render=render_markdown,
    ),
    NoteFormat.ORG: FormatHandler(
        extract=extract_org_properties,
        normalize=org_to_markdown,
        links=lambda raw, body: extract_org_links(raw),
        render=render_markdown,
    ),
    NoteFormat.CSV: FormatHandler(
        extract=_flashcard_metadata,
        normalize=_identity,
        links=lambda raw, body: [],
        render=render_csv_table,
    ),
}


def get_handler(fmt: NoteFormat) -> FormatHandler:
    return FORMAT_HANDLERS[fmt]


__all__ = ["FLASHCARD_TAGS", "FORMAT_HANDLERS", "FormatHandler", "get_handler"]
