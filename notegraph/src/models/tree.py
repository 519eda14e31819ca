"""Folder tree models for sidebar navigation."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from .note import NoteMetadata


class FolderTree(BaseModel):
    """A folder node: child folders in insertion order, notes sorted by title."""

    name: str
    path: str = Field(default="", description="Slash-joined ancestry; empty at the root")
    children: list[FolderTree] = Field(default_factory=list)
    notes: list[NoteMetadata] = Field(default_factory=list)

    def child(self, name: str) -> Optional[FolderTree]:
        """Return the direct child folder called ``name``, if any."""
        for node in self.children:
            if node.name == name:
                return node
        return None

    def find(self, path: str) -> Optional[FolderTree]:
        """Look up a descendant by slash-joined path (``""`` is this node)."""
        node: Optional[FolderTree] = self
        for part in [p for p in path.split("/") if p]:
            if node is None:
                return None
            node = node.child(part)
        return node

    def iter_notes(self):
        """Yield every note in this subtree, depth-first."""
        yield from self.notes
        for node in self.children:
            yield from node.iter_notes()


FolderTree.model_rebuild()

__all__ = ["FolderTree"]
