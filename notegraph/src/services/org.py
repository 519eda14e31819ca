"""
Org outline markup to markdown transliteration.

This is a lexical rewrite, not a parser: an ordered list of line-oriented
regular substitutions. Order matters. Heading markers run longest first so
``***`` is never read as ``*`` plus bold; emphasis runs after headings so a
heading's leading stars are already gone; described links run before bare
links; list markers run after emphasis.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Sequence


@dataclass(frozen=True)
class RewriteRule:
    """One substitution step in the org -> markdown chain."""

    name: str
    pattern: re.Pattern[str]
    replacement: str

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def _rule(name: str, pattern: str, replacement: str, flags: int = 0) -> RewriteRule:
    return RewriteRule(name, re.compile(pattern, flags), replacement)


ORG_TO_MARKDOWN_RULES: Sequence[RewriteRule] = (
    _rule("heading-5", r"^\*\*\*\*\*\s+(.+)$", r"##### \1", re.MULTILINE),
    _rule("heading-4", r"^\*\*\*\*\s+(.+)$", r"#### \1", re.MULTILINE),
    _rule("heading-3", r"^\*\*\*\s+(.+)$", r"### \1", re.MULTILINE),
    _rule("heading-2", r"^\*\*\s+(.+)$", r"## \1", re.MULTILINE),
    _rule("heading-1", r"^\*\s+(.+)$", r"# \1", re.MULTILINE),
    _rule("bold", r"\*([^*\n]+)\*", r"**\1**"),
    _rule("italic", r"/([^/\n]+)/", r"*\1*"),
    _rule("verbatim", r"=([^=\n]+)=", r"`\1`"),
    _rule("code", r"~([^~\n]+)~", r"`\1`"),
    _rule("id-link-described", r"\[\[id:([^\]]+)\]\[([^\]]+)\]\]", r"[\2](note:\1)"),
    _rule("id-link", r"\[\[id:([^\]]+)\]\]", r"[\1](note:\1)"),
    _rule("external-link", r"\[\[([^\]]+)\]\[([^\]]+)\]\]", r"[\2](\1)"),
    _rule("list-dash", r"^(\s*)-\s+", r"\1- ", re.MULTILINE),
    _rule("list-plus", r"^(\s*)\+\s+", r"\1- ", re.MULTILINE),
    _rule("src-begin", r"^#\+begin_src\s*(\w*)", r"```\1", re.MULTILINE | re.IGNORECASE),
    _rule("src-end", r"^#\+end_src", "```", re.MULTILINE | re.IGNORECASE),
    _rule("quote-begin", r"^#\+begin_quote", ">", re.MULTILINE | re.IGNORECASE),
    _rule("quote-end", r"^#\+end_quote", "", re.MULTILINE | re.IGNORECASE),
)


def org_to_markdown(org: str, rules: Sequence[RewriteRule] = ORG_TO_MARKDOWN_RULES) -> str:
    """Apply the rewrite chain to an org body."""
    text = org
    for rule in rules:
        text = rule.apply(text)
    return text


__all__ = ["ORG_TO_MARKDOWN_RULES", "RewriteRule", "org_to_markdown"]
