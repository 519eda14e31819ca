import pytest

from notegraph.src.models.note import Note, NoteFormat, NoteMetadata, NoteType


def _meta(**overrides) -> NoteMetadata:
    fields = {"id": "n", "title": "N", "slug": "n"}
    fields.update(overrides)
    return NoteMetadata(**fields)


@pytest.mark.parametrize(
    ("importance", "expected"),
    [(None, 5), ("7", 7), (" 8/10", 8), ("high", 5), ("", 5)],
)
def test_importance_score(importance, expected) -> None:
    assert _meta(importance=importance).importance_score == expected


def test_date_range_with_both_bounds() -> None:
    meta = _meta(start="2025-01-01", finish="2025-01-15")

    assert meta.date_range == "January 1, 2025 - January 15, 2025"


def test_date_range_with_start_only_or_bad_finish() -> None:
    assert _meta(start="2025-03-09").date_range == "March 9, 2025"
    assert _meta(start="2025-03-09", finish="soon").date_range == "March 9, 2025"


def test_date_range_unparsable_start() -> None:
    assert _meta(start="someday", finish="2025-01-01").date_range is None
    assert _meta().date_range is None


def test_format_from_path() -> None:
    assert NoteFormat.from_path("a/b.MD") is NoteFormat.MARKDOWN
    assert NoteFormat.from_path("x.org") is NoteFormat.ORG
    assert NoteFormat.from_path("deck.csv") is NoteFormat.CSV
    assert NoteFormat.from_path("notes.txt") is None


def test_summary_drops_content_and_keeps_metadata() -> None:
    note = Note(
        id="n",
        title="N",
        slug="dir/n",
        folder="dir",
        links=["m"],
        note_type=NoteType.CARD,
        content="body",
        html_content="<p>body</p>",
    )

    summary = note.summary()

    assert type(summary) is NoteMetadata
    assert summary.links == ["m"]
    assert summary.note_type is NoteType.CARD
    assert "content" not in summary.model_dump()


def test_serialization_includes_derived_fields() -> None:
    data = _meta(importance="9").model_dump(mode="json")

    assert data["importance_score"] == 9
    assert data["note_type"] == "note"
