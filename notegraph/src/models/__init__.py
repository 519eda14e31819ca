"""Pydantic models for data validation and serialization."""

from .graph import GraphData, GraphLink, GraphNode
from .note import (
    ExtractedMetadata,
    Note,
    NoteFormat,
    NoteMetadata,
    NoteType,
)
from .tree import FolderTree

__all__ = [
    "ExtractedMetadata",
    "FolderTree",
    "GraphData",
    "GraphLink",
    "GraphNode",
    "Note",
    "NoteFormat",
    "NoteMetadata",
    "NoteType",
]
