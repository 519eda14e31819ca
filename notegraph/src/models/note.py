"""Note-related Pydantic models."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from pathlib import PurePath
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

DEFAULT_IMPORTANCE = 5
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")


class NoteType(str, Enum):
    """How the presentation layer treats a note."""

    NOTE = "note"
    CARD = "card"


class NoteFormat(str, Enum):
    """Source format of a note file, resolved once from its extension."""

    MARKDOWN = "markdown"
    ORG = "org"
    CSV = "csv"

    @property
    def extension(self) -> str:
        return _FORMAT_EXTENSIONS[self]

    @classmethod
    def from_path(cls, path: str | PurePath) -> Optional["NoteFormat"]:
        suffix = PurePath(path).suffix.lower()
        for fmt, extension in _FORMAT_EXTENSIONS.items():
            if extension == suffix:
                return fmt
        return None


_FORMAT_EXTENSIONS = {
    NoteFormat.MARKDOWN: ".md",
    NoteFormat.ORG: ".org",
    NoteFormat.CSV: ".csv",
}

NOTE_EXTENSIONS = frozenset(_FORMAT_EXTENSIONS.values())


def parse_date(value: str | None) -> Optional[datetime]:
    """Parse ``YYYY-MM-DD`` or an ISO-8601 datetime; ``None`` if unparsable."""
    if not value:
        return None
    text = value.strip()
    if ISO_DATE_PATTERN.match(text):
        try:
            parsed = date.fromisoformat(text)
        except ValueError:
            return None
        # Noon avoids day rollover when the consumer shifts timezones.
        return datetime(parsed.year, parsed.month, parsed.day, 12)
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_full_date(value: datetime) -> str:
    """Format as ``January 1, 2025``."""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


class ExtractedMetadata(BaseModel):
    """Partial metadata pulled from a note header; every field is optional."""

    id: Optional[str] = None
    title: Optional[str] = None
    tags: Optional[list[str]] = None
    status: Optional[str] = None
    certainty: Optional[str] = None
    importance: Optional[str] = None
    start: Optional[str] = None
    finish: Optional[str] = None
    preview: Optional[str] = None


class NoteMetadata(BaseModel):
    """Everything about a note except its content."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "20240101-entropy",
                "title": "Entropy",
                "slug": "slipbox/entropy",
                "folder": "slipbox",
                "tags": ["physics"],
                "status": "in progress",
                "certainty": "likely",
                "importance": "7",
                "start": "2024-01-01",
                "finish": None,
                "preview": None,
                "links": ["20231212-heat"],
                "note_type": "note",
            }
        },
    )

    id: str = Field(..., min_length=1, description="Stable identifier used for cross-linking")
    title: str = Field(..., description="Display title")
    slug: str = Field(..., min_length=1, description="Path relative to the content root, no extension")
    folder: str = Field(default="", description="Directory component of the slug")
    tags: list[str] = Field(default_factory=list)
    status: Optional[str] = None
    certainty: Optional[str] = None
    importance: Optional[str] = None
    start: Optional[str] = None
    finish: Optional[str] = None
    preview: Optional[str] = None
    links: list[str] = Field(default_factory=list, description="Referenced note ids, first-occurrence order")
    note_type: NoteType = NoteType.NOTE

    @computed_field  # type: ignore[prop-decorator]
    @property
    def importance_score(self) -> int:
        if not self.importance:
            return DEFAULT_IMPORTANCE
        match = LEADING_INT_PATTERN.match(self.importance)
        if not match:
            return DEFAULT_IMPORTANCE
        return int(match.group(1))

    @computed_field  # type: ignore[prop-decorator]
    @property
    def date_range(self) -> Optional[str]:
        start = parse_date(self.start)
        if start is None:
            return None
        finish = parse_date(self.finish)
        if finish is None:
            return format_full_date(start)
        return f"{format_full_date(start)} - {format_full_date(finish)}"


class Note(NoteMetadata):
    """Complete note with raw body and rendered HTML."""

    content: str = Field(default="", description="Body in the common markup dialect (or raw CSV)")
    html_content: str = Field(default="", description="Rendered display markup")

    def summary(self) -> NoteMetadata:
        """Project the note onto its metadata (drops content)."""
        return NoteMetadata(**self.model_dump(include=set(NoteMetadata.model_fields)))


__all__ = [
    "DEFAULT_IMPORTANCE",
    "ExtractedMetadata",
    "NOTE_EXTENSIONS",
    "Note",
    "NoteFormat",
    "NoteMetadata",
    "NoteType",
    "format_full_date",
    "parse_date",
]
