from notegraph.src.services.links import extract_markdown_links, extract_org_links


def test_org_links_are_deduplicated_in_order() -> None:
    text = "[[id:a]] then [[id:b][Bee]] then [[id:a]] again"

    assert extract_org_links(text) == ["a", "b"]


def test_org_links_ignore_external_references() -> None:
    assert extract_org_links("[[https://example.com][site]]") == []


def test_markdown_note_links() -> None:
    text = "[A](note:a) [B](note:b) [A again](note:a) [ext](https://x.org)"

    assert extract_markdown_links(text) == ["a", "b"]


def test_no_links() -> None:
    assert extract_markdown_links("") == []
    assert extract_org_links("plain") == []
