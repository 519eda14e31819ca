from pathlib import Path

import pytest

from notegraph.src.services.config import AppConfig
from notegraph.src.services.vault import VaultService

FOO_BAR_MD = """---
id: foo
title: Foo Bar
tags: [physics, thermo]
status: in progress
importance: 7
start: 2024-01-01
unknown_key: ignored
---
Foo links to [Baz](note:baz) and to [Ghost](note:ghost).
"""

BAZ_ORG = """:PROPERTIES:
:ID:       baz
:STATUS:   draft
:END:
#+title: Baz
#+filetags: :org:

Baz points back at [[id:foo][Foo]].
"""

CAPITALS_MD = "No front matter here.\n"

ARITH_CSV = 'Front,Back\n"What is 2+2?","4"\n'

ROOT_MD = """---
title: Welcome
---
Start here.
"""


def write(root: Path, relative: str, text: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def corpus_root(tmp_path: Path) -> Path:
    root = tmp_path / "notes"
    write(root, "slipbox/foo bar.md", FOO_BAR_MD)
    write(root, "slipbox/baz.org", BAZ_ORG)
    write(root, "cards/capitals.md", CAPITALS_MD)
    write(root, "decks/arith.csv", ARITH_CSV)
    write(root, "root.md", ROOT_MD)
    write(root, ".hidden/secret.md", "---\nid: secret\n---\n")
    write(root, "node_modules/pkg/readme.md", "# vendored\n")
    write(root, "notes.txt", "not a note\n")
    return root


@pytest.fixture
def vault_config(corpus_root: Path) -> AppConfig:
    return AppConfig(content_root=corpus_root)


@pytest.fixture
def vault(vault_config: AppConfig) -> VaultService:
    return VaultService(config=vault_config)


@pytest.fixture
def write_file():
    """Helper that writes ``text`` to ``root / relative``, creating parents."""
    return write
