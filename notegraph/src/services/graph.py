"""Link graph construction for the visualization layer."""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from ..models.graph import GraphData, GraphLink, GraphNode
from ..models.note import NoteMetadata


def build_graph_data(notes: Iterable[NoteMetadata]) -> GraphData:
    """
    One node per note id, one edge per resolvable link.

    A later note with an already-seen id replaces the earlier node. Links to
    unknown ids and links from a note to itself are dropped silently. Edges
    are not deduplicated across notes.
    """
    notes = list(notes)
    nodes: Dict[str, GraphNode] = {}
    for note in notes:
        nodes[note.id] = GraphNode(id=note.id, title=note.title, slug=note.slug, folder=note.folder)

    links: List[GraphLink] = []
    for note in notes:
        for target in note.links:
            if target == note.id or target not in nodes:
                continue
            links.append(GraphLink(source=note.id, target=target))

    return GraphData(nodes=list(nodes.values()), links=links)


def backlinks(notes: Sequence[NoteMetadata], target_id: str) -> List[NoteMetadata]:
    """Notes whose declared links include ``target_id``, in corpus order."""
    return [note for note in notes if target_id in note.links]


__all__ = ["backlinks", "build_graph_data"]
