"""Graph data models."""

from typing import List
from pydantic import BaseModel, Field

class GraphNode(BaseModel):
    """Represents a single note in the graph."""
    id: str = Field(..., description="Unique identifier (note id)")
    title: str = Field(..., description="Display title of the note")
    slug: str = Field(..., description="Path-derived lookup key")
    folder: str = Field(default="", description="Folder the note lives in (grouping)")

class GraphLink(BaseModel):
    """Represents a directed connection between two notes."""
    source: str = Field(..., description="ID of the source note")
    target: str = Field(..., description="ID of the target note")

class GraphData(BaseModel):
    """The top-level payload handed to the visualization layer."""
    nodes: List[GraphNode] = Field(default_factory=list)
    links: List[GraphLink] = Field(default_factory=list)
