"""Note-to-note link extraction."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List

# [[id:IDENTIFIER]] or [[id:IDENTIFIER][description]]
ORG_ID_LINK_PATTERN = re.compile(r"\[\[id:([^\]]+)\](?:\[[^\]]*\])?\]")
# [text](note:IDENTIFIER)
NOTE_LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(note:([^)]+)\)")


def dedupe(values: Iterable[str]) -> List[str]:
    """Drop duplicates, keeping first-occurrence order."""
    seen: Dict[str, None] = {}
    for value in values:
        if value not in seen:
            seen[value] = None
    return list(seen.keys())


def extract_org_links(text: str) -> List[str]:
    """Extract ids from org ``[[id:...]]`` references in raw org text."""
    return dedupe(match.group(1) for match in ORG_ID_LINK_PATTERN.finditer(text or ""))


def extract_markdown_links(text: str) -> List[str]:
    """Extract ids from markdown ``[text](note:id)`` links."""
    return dedupe(match.group(2) for match in NOTE_LINK_PATTERN.finditer(text or ""))


__all__ = [
    "NOTE_LINK_PATTERN",
    "ORG_ID_LINK_PATTERN",
    "dedupe",
    "extract_markdown_links",
    "extract_org_links",
]
