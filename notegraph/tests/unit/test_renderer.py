from notegraph.src.services.renderer import render_csv_table, render_markdown


def test_gfm_table() -> None:
    html = render_markdown("| a | b |\n| - | - |\n| 1 | 2 |\n")

    assert "<table>" in html
    assert "<th>a</th>" in html
    assert "<td>2</td>" in html


def test_strikethrough_and_task_list() -> None:
    html = render_markdown("~~gone~~\n\n- [x] done\n- [ ] todo\n")

    assert "<s>gone</s>" in html
    assert 'type="checkbox"' in html
    assert "checked" in html


def test_inline_math_is_wrapped_and_escaped() -> None:
    html = render_markdown("Energy $E=mc^2$ and $a<b$.")

    assert '<span class="math math-inline">\\(E=mc^2\\)</span>' in html
    assert "\\(a&lt;b\\)" in html


def test_display_math() -> None:
    html = render_markdown("$$\na^2+b^2=c^2\n$$\n")

    assert '<div class="math math-display">' in html
    assert "a^2+b^2=c^2" in html


def test_raw_html_passes_through() -> None:
    html = render_markdown('<div class="aside">hi</div>\n')

    assert '<div class="aside">hi</div>' in html


def test_note_scheme_links_are_kept() -> None:
    html = render_markdown("[Heat](note:heat)")

    assert '<a href="note:heat">Heat</a>' in html


def test_flashcard_table() -> None:
    html = render_csv_table('Front,Back\n"What is 2+2?","4"\n')

    assert html == (
        '<table class="flashcard-table">'
        "<thead><tr><th>Front</th><th>Back</th></tr></thead>"
        "<tbody><tr><td>What is 2+2?</td><td>4</td></tr></tbody>"
        "</table>"
    )


def test_flashcard_cells_are_trimmed_without_quotes() -> None:
    html = render_csv_table("Front , Back\nWhat is 2+2? , 4")

    assert "<th>Front</th><th>Back</th>" in html
    assert "<td>What is 2+2?</td><td>4</td>" in html


def test_flashcard_header_only() -> None:
    html = render_csv_table("Front,Back")

    assert "<tbody></tbody>" in html


def test_empty_flashcard_file() -> None:
    assert render_csv_table("   \n") == ""
