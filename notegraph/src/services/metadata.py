"""Metadata extraction for front-matter markdown and org outline files."""

from __future__ import annotations

from datetime import date, datetime
import re
from typing import Any, Dict, Mapping, Tuple

import frontmatter

from ..models.note import ExtractedMetadata

RECOGNIZED_KEYS = (
    "id",
    "title",
    "tags",
    "status",
    "certainty",
    "importance",
    "start",
    "finish",
    "preview",
)

# Property drawer key -> metadata field.
ORG_PROPERTY_KEYS = {
    "ID": "id",
    "STATUS": "status",
    "CERTAINTY": "certainty",
    "IMPORTANCE": "importance",
    "START": "start",
    "FINISH": "finish",
    "PREVIEW": "preview",
}

DRAWER_START = ":PROPERTIES:"
DRAWER_END = ":END:"
DIRECTIVE_PREFIX = "#+"
PROPERTY_PATTERN = re.compile(r"^:([A-Z_]+):\s*(.*)$")
TITLE_PATTERN = re.compile(r"^#\+title:\s*", re.IGNORECASE)
FILETAGS_PATTERN = re.compile(r"^#\+filetags:\s*", re.IGNORECASE)


def _stringify(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def _coerce_tags(value: Any) -> list[str] | None:
    if value is None:
        return None
    if isinstance(value, (list, tuple, set)):
        return [str(tag) for tag in value if tag is not None]
    return [str(value)]


def metadata_from_mapping(data: Mapping[str, Any]) -> ExtractedMetadata:
    """Map recognized front-matter keys onto metadata, ignoring the rest."""
    fields: Dict[str, Any] = {}
    for key in RECOGNIZED_KEYS:
        if key not in data:
            continue
        if key == "tags":
            fields[key] = _coerce_tags(data[key])
        else:
            fields[key] = _stringify(data[key])
    return ExtractedMetadata(**fields)


def extract_frontmatter(text: str) -> Tuple[ExtractedMetadata, str]:
    """
    Split a markdown document into metadata and body.

    Documents without a front-matter block yield empty metadata and the
    full text as body. Malformed YAML propagates the parser's error.
    """
    post = frontmatter.loads(text)
    metadata = metadata_from_mapping(dict(post.metadata or {}))
    return metadata, post.content or ""


def extract_org_properties(text: str) -> Tuple[ExtractedMetadata, str]:
    """
    Read the property drawer and ``#+`` directives at the top of an org file.

    The body starts at the first non-empty line that is neither a directive
    nor inside/delimiting a drawer. When no such line exists the body start
    stays at 0, so the whole text is returned.
    """
    lines = text.split("\n")
    fields: Dict[str, Any] = {}
    body_start = 0
    in_drawer = False

    for index, raw_line in enumerate(lines):
        line = raw_line.strip()

        if line == DRAWER_START:
            in_drawer = True
            continue
        if line == DRAWER_END:
            in_drawer = False
            continue

        if in_drawer:
            match = PROPERTY_PATTERN.match(line)
            if match:
                key, value = match.groups()
                field = ORG_PROPERTY_KEYS.get(key)
                if field:
                    fields[field] = value.strip()
            continue

        if TITLE_PATTERN.match(line):
            fields["title"] = TITLE_PATTERN.sub("", line, count=1).strip()
            continue

        if FILETAGS_PATTERN.match(line):
            tag_string = FILETAGS_PATTERN.sub("", line, count=1).strip()
            fields["tags"] = [tag for tag in tag_string.split(":") if tag]
            continue

        if line.startswith(DIRECTIVE_PREFIX):
            continue

        if line:
            body_start = index
            break

    return ExtractedMetadata(**fields), "\n".join(lines[body_start:])


__all__ = [
    "ORG_PROPERTY_KEYS",
    "RECOGNIZED_KEYS",
    "extract_frontmatter",
    "extract_org_properties",
    "metadata_from_mapping",
]
