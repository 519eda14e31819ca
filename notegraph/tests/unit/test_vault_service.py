import os
from pathlib import Path

from notegraph.src.models.note import NoteType
from notegraph.src.services.config import AppConfig
from notegraph.src.services.vault import (
    VaultService,
    compute_slug,
    folder_of,
    iter_note_files,
)



def _relative(paths, root: Path) -> list[str]:
    return [path.relative_to(root).as_posix() for path in paths]


def test_walker_skips_hidden_and_excluded_dirs(corpus_root: Path) -> None:
    files = _relative(iter_note_files(corpus_root, ("node_modules",)), corpus_root)

    assert files == [
        "cards/capitals.md",
        "decks/arith.csv",
        "root.md",
        "slipbox/baz.org",
        "slipbox/foo bar.md",
    ]


def test_walker_missing_root_is_empty(tmp_path: Path) -> None:
    assert list(iter_note_files(tmp_path / "nope")) == []


def test_walker_skips_symlinks(tmp_path: Path, write_file) -> None:
    root = tmp_path / "notes"
    write_file(root, "slipbox/a.md", "# a\n")
    (root / "slipbox" / "loop").symlink_to(root, target_is_directory=True)
    (root / "alias.md").symlink_to(root / "slipbox" / "a.md")

    notes = VaultService(config=AppConfig(content_root=root)).load_notes()

    assert [note.slug for note in notes] == ["slipbox/a"]


def test_slug_and_folder(corpus_root: Path) -> None:
    slug = compute_slug(corpus_root / "slipbox" / "foo bar.md", corpus_root)

    assert slug == "slipbox/foo bar"
    assert folder_of(slug) == "slipbox"
    assert folder_of("root") == ""


def test_markdown_note_fields(vault: VaultService, corpus_root: Path) -> None:
    note = vault.parse_note(corpus_root / "slipbox" / "foo bar.md")

    assert note is not None
    assert note.id == "foo"
    assert note.title == "Foo Bar"
    assert note.slug == "slipbox/foo bar"
    assert note.folder == "slipbox"
    assert note.tags == ["physics", "thermo"]
    assert note.status == "in progress"
    assert note.importance == "7"
    assert note.links == ["baz", "ghost"]
    assert note.note_type is NoteType.NOTE
    assert '<a href="note:baz">Baz</a>' in note.html_content


def test_org_note_links_come_from_raw_text(vault: VaultService, corpus_root: Path) -> None:
    note = vault.parse_note(corpus_root / "slipbox" / "baz.org")

    assert note is not None
    assert note.id == "baz"
    assert note.title == "Baz"
    assert note.status == "draft"
    assert note.tags == ["org"]
    assert note.links == ["foo"]
    assert "[Foo](note:foo)" in note.content
    assert '<a href="note:foo">Foo</a>' in note.html_content


def test_markdown_under_cards_is_a_card(vault: VaultService, corpus_root: Path) -> None:
    note = vault.parse_note(corpus_root / "cards" / "capitals.md")

    assert note is not None
    assert note.note_type is NoteType.CARD
    assert note.id == "cards/capitals"
    assert note.title == "capitals"
    assert note.tags == []


def test_csv_is_a_flashcard_card(vault: VaultService, corpus_root: Path) -> None:
    note = vault.parse_note(corpus_root / "decks" / "arith.csv")

    assert note is not None
    assert note.note_type is NoteType.CARD
    assert note.id == "decks/arith"
    assert note.title == "arith"
    assert note.tags == ["flashcards"]
    assert note.links == []
    assert note.html_content.startswith('<table class="flashcard-table">')


def test_nested_cards_folder_is_not_a_card(vault: VaultService, corpus_root: Path, write_file) -> None:
    path = write_file(corpus_root, "cards/geo/rivers.md", "Rivers.\n")

    note = vault.parse_note(path)

    assert note is not None
    assert note.folder == "cards/geo"
    assert note.note_type is NoteType.NOTE


def test_org_without_header_falls_back(vault: VaultService, corpus_root: Path, write_file) -> None:
    path = write_file(corpus_root, "jottings/plain.org", "Just a thought.\n")

    note = vault.parse_note(path)

    assert note is not None
    assert note.title == "plain"
    assert note.id == "jottings/plain"
    assert note.tags == []


def test_root_note_has_empty_folder(vault: VaultService, corpus_root: Path) -> None:
    note = vault.parse_note(corpus_root / "root.md")

    assert note is not None
    assert note.folder == ""
    assert note.id == "root"
    assert note.title == "Welcome"


def test_broken_files_are_skipped(vault: VaultService, corpus_root: Path, caplog, write_file) -> None:
    write_file(corpus_root, "bad.md", "---\ntitle: [unclosed\n---\nbody\n")
    (corpus_root / "broken.org").write_bytes(b"\xff\xfe\x00bad")

    with caplog.at_level("WARNING"):
        notes = vault.load_notes()

    slugs = [note.slug for note in notes]
    assert "bad" not in slugs
    assert "broken" not in slugs
    assert len(notes) == 5
    assert any("Failed to parse note" in record.message for record in caplog.records)


def test_load_notes_missing_root(tmp_path: Path) -> None:
    service = VaultService(AppConfig(content_root=tmp_path / "missing"))

    assert service.load_notes() == []
    assert service.snapshot().notes == ()


def test_parallel_load_keeps_walk_order(corpus_root: Path, vault: VaultService) -> None:
    parallel = VaultService(AppConfig(content_root=corpus_root, parse_workers=4))

    assert [n.slug for n in parallel.load_notes()] == [n.slug for n in vault.load_notes()]


def test_get_note_by_slug(vault: VaultService, corpus_root: Path) -> None:
    assert vault.get_note_by_slug("slipbox/baz").id == "baz"
    assert vault.get_note_by_slug("decks/arith").note_type is NoteType.CARD
    assert vault.get_note_by_slug("slipbox/missing") is None
    assert vault.get_note_by_slug("../notes/root") is None


def test_get_note_by_slug_ignores_unwalked_dirs(vault: VaultService) -> None:
    assert vault.get_note_by_slug(".hidden/secret") is None
    assert vault.get_note_by_slug("node_modules/pkg/readme") is None


def test_get_note_by_slug_prefers_markdown(vault: VaultService, corpus_root: Path, write_file) -> None:
    write_file(corpus_root, "index/dup.org", "#+title: Org Dup\n\nx\n")
    write_file(corpus_root, "index/dup.md", "---\ntitle: Md Dup\n---\nx\n")

    assert vault.get_note_by_slug("index/dup").title == "Md Dup"


def test_get_note_by_id(vault: VaultService) -> None:
    assert vault.get_note_by_id("foo").slug == "slipbox/foo bar"
    assert vault.get_note_by_id("ghost") is None


def test_notes_map_indexes_slug_and_id(vault: VaultService) -> None:
    mapping = vault.notes_map()

    assert mapping["slipbox/foo bar"] is mapping["foo"]
    assert mapping["root"].title == "Welcome"
    assert "baz" in mapping and "slipbox/baz" in mapping


def test_snapshot_is_cached_until_corpus_changes(vault: VaultService, corpus_root: Path, write_file) -> None:
    first = vault.snapshot()

    assert vault.snapshot() is first

    write_file(corpus_root, "marginalia/new.md", "New.\n")
    second = vault.snapshot()

    assert second is not first
    assert len(second.notes) == len(first.notes) + 1


def test_snapshot_rebuilds_on_modified_file(vault: VaultService, corpus_root: Path) -> None:
    first = vault.snapshot()
    path = corpus_root / "root.md"
    path.write_text("---\ntitle: Changed\n---\n", encoding="utf-8")
    stat = path.stat()
    os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 5_000_000_000))

    assert vault.snapshot().get("root").title == "Changed"
    assert first.get("root").title == "Welcome"


def test_snapshot_backlinks(vault: VaultService) -> None:
    snapshot = vault.snapshot()

    assert [note.id for note in snapshot.backlinks("foo")] == ["baz"]
    assert snapshot.backlinks("ghost") == []
