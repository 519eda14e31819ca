"""Folder tree construction for sidebar navigation."""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence
import unicodedata

from ..models.note import Note, NoteMetadata
from ..models.tree import FolderTree
from .config import DEFAULT_TOP_LEVEL_FOLDERS

ROOT_NAME = "Notes"


def collation_key(text: str) -> tuple[str, str, str]:
    """
    Approximate en-US locale ordering without ICU.

    Base letters compare first, then accents (unaccented first), then case
    (lowercase first), so "apple" < "Apple" < "Äpple". Scripts and
    contractions that ICU tailors are not handled; those fall back to code
    point order.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text.casefold(), text.swapcase()


def _get_or_create(root: FolderTree, parts: Sequence[str]) -> FolderTree:
    current = root
    current_path = ""
    for part in parts:
        current_path = f"{current_path}/{part}" if current_path else part
        child = current.child(part)
        if child is None:
            child = FolderTree(name=part, path=current_path)
            current.children.append(child)
        current = child
    return current


def _sort_notes(node: FolderTree) -> None:
    node.notes.sort(key=lambda note: collation_key(note.title))
    for child in node.children:
        _sort_notes(child)


def build_folder_tree(
    notes: Iterable[Note | NoteMetadata],
    top_level_folders: Sequence[str] = DEFAULT_TOP_LEVEL_FOLDERS,
) -> FolderTree:
    """
    Group notes into a folder hierarchy.

    The fixed top-level folders are created first, in order, even when empty.
    Other folders appear in the order their first note was seen. Notes in
    every folder are sorted by title; folder order is left alone.
    """
    root = FolderTree(name=ROOT_NAME, path="")
    for name in top_level_folders:
        root.children.append(FolderTree(name=name, path=name))

    grouped: Dict[str, List[NoteMetadata]] = {}
    for note in notes:
        summary = note.summary() if isinstance(note, Note) else note
        grouped.setdefault(summary.folder or "", []).append(summary)

    for folder, folder_notes in grouped.items():
        parts = folder.split("/") if folder else []
        _get_or_create(root, parts).notes.extend(folder_notes)

    _sort_notes(root)
    return root


__all__ = ["ROOT_NAME", "build_folder_tree", "collation_key"]
