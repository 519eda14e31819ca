"""Service layer: the note ingestion pipeline and its configuration."""

from .config import AppConfig, get_config, reload_config
from .formats import FORMAT_HANDLERS, FormatHandler, get_handler
from .graph import backlinks, build_graph_data
from .links import extract_markdown_links, extract_org_links
from .metadata import extract_frontmatter, extract_org_properties
from .org import org_to_markdown
from .renderer import render_csv_table, render_markdown
from .tree import build_folder_tree
from .vault import (
    CorpusSnapshot,
    NoteParseError,
    VaultService,
    assemble_note,
    compute_slug,
    iter_note_files,
)

__all__ = [
    "AppConfig",
    "get_config",
    "reload_config",
    "FORMAT_HANDLERS",
    "FormatHandler",
    "get_handler",
    "backlinks",
    "build_graph_data",
    "extract_markdown_links",
    "extract_org_links",
    "extract_frontmatter",
    "extract_org_properties",
    "org_to_markdown",
    "render_csv_table",
    "render_markdown",
    "build_folder_tree",
    "CorpusSnapshot",
    "NoteParseError",
    "VaultService",
    "assemble_note",
    "compute_slug",
    "iter_note_files",
]
