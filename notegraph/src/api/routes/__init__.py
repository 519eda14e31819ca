"""HTTP API route handlers."""

from . import graph, notes, system, tree

__all__ = ["graph", "notes", "system", "tree"]
