"""Filesystem corpus: discovery, per-file note assembly, and lookups."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
import logging
import os
from pathlib import Path, PurePosixPath
import posixpath
import re
import threading
import time
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..models.graph import GraphData
from ..models.note import NOTE_EXTENSIONS, Note, NoteFormat, NoteMetadata, NoteType
from ..models.tree import FolderTree
from .config import CARDS_FOLDER, AppConfig, get_config
from .formats import get_handler
from .graph import backlinks, build_graph_data
from .tree import build_folder_tree

logger = logging.getLogger(__name__)

HIDDEN_PREFIX = "."
NOTE_SUFFIX_PATTERN = re.compile(r"\.(md|org|csv)$", re.IGNORECASE)
SLUG_LOOKUP_ORDER = (NoteFormat.MARKDOWN, NoteFormat.ORG, NoteFormat.CSV)


class NoteParseError(ValueError):
    """Raised when a single file cannot be turned into a note."""

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


def compute_slug(file_path: Path, content_root: Path) -> str:
    """Path relative to the content root, ``/``-separated, extension stripped."""
    relative = file_path.relative_to(content_root).as_posix().replace("\\", "/")
    return NOTE_SUFFIX_PATTERN.sub("", relative)


def folder_of(slug: str) -> str:
    """Directory component of a slug; ``""`` for notes at the root."""
    folder = posixpath.dirname(slug)
    return "" if folder in ("", ".") else folder


def _is_excluded_dir(name: str, excluded_dirs: Sequence[str]) -> bool:
    return name.startswith(HIDDEN_PREFIX) or name in excluded_dirs


def _walk(directory: Path, excluded_dirs: Sequence[str]) -> Iterator[Tuple[Path, bool]]:
    """Yield ``(path, is_dir)`` depth-first in name order, pruning excluded dirs."""
    try:
        entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
    except (FileNotFoundError, NotADirectoryError):
        return
    for entry in entries:
        # Symlinked files and directories are skipped, never followed.
        if entry.is_symlink():
            continue
        if entry.is_dir():
            if _is_excluded_dir(entry.name, excluded_dirs):
                continue
            yield entry, True
            yield from _walk(entry, excluded_dirs)
        elif entry.is_file():
            yield entry, False


def iter_note_files(content_root: Path, excluded_dirs: Sequence[str] = ()) -> Iterator[Path]:
    """Recursively yield ``.md``, ``.org`` and ``.csv`` files under the root."""
    for path, is_dir in _walk(content_root, excluded_dirs):
        if not is_dir and path.suffix.lower() in NOTE_EXTENSIONS:
            yield path


def corpus_fingerprint(content_root: Path, excluded_dirs: Sequence[str] = ()) -> Tuple[int, int]:
    """``(entry count, newest mtime in ns)`` over the walked tree."""
    if not content_root.is_dir():
        return 0, 0
    count = 0
    newest = content_root.stat().st_mtime_ns
    for path, _ in _walk(content_root, excluded_dirs):
        try:
            newest = max(newest, path.stat().st_mtime_ns)
        except FileNotFoundError:
            continue
        count += 1
    return count, newest


def assemble_note(file_path: Path, content_root: Path, raw: str) -> Note:
    """Build a note from a file's text, applying the metadata fallbacks."""
    fmt = NoteFormat.from_path(file_path)
    if fmt is None:
        raise NoteParseError(file_path, "unsupported file extension")

    slug = compute_slug(file_path, content_root)
    folder = folder_of(slug)
    stem = file_path.stem
    note_type = NoteType.CARD if folder == CARDS_FOLDER or fmt is NoteFormat.CSV else NoteType.NOTE

    handler = get_handler(fmt)
    metadata, body = handler.extract(raw)
    content = handler.normalize(body)
    links = handler.links(raw, body)
    html_content = handler.render(content)

    return Note(
        id=metadata.id or slug,
        title=metadata.title or stem,
        slug=slug,
        folder=folder,
        tags=metadata.tags or [],
        status=metadata.status,
        certainty=metadata.certainty,
        importance=metadata.importance,
        start=metadata.start,
        finish=metadata.finish,
        preview=metadata.preview,
        links=links,
        note_type=note_type,
        content=content,
        html_content=html_content,
    )


@dataclass(frozen=True)
class CorpusSnapshot:
    """Every derived structure from one read of the corpus."""

    notes: Tuple[Note, ...]
    tree: FolderTree
    graph: GraphData
    fingerprint: Tuple[int, int] = (0, 0)
    _by_key: Dict[str, Note] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._by_key.update(notes_by_key(self.notes))

    def get(self, key: str) -> Optional[Note]:
        """Look a note up by slug or id."""
        return self._by_key.get(key)

    def backlinks(self, note_id: str) -> List[NoteMetadata]:
        return [note.summary() for note in backlinks(self.notes, note_id)]


def notes_by_key(notes: Sequence[Note]) -> Dict[str, Note]:
    """Index notes by slug, and also by id where it differs from the slug."""
    mapping: Dict[str, Note] = {}
    for note in notes:
        mapping[note.slug] = note
        if note.id != note.slug:
            mapping[note.id] = note
    return mapping


class VaultService:
    """Read-only access to the note corpus under the configured content root."""

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or get_config()
        self.content_root = self.config.content_root
        self._snapshot: Optional[CorpusSnapshot] = None
        self._lock = threading.Lock()

    def iter_note_files(self) -> Iterator[Path]:
        return iter_note_files(self.content_root, self.config.excluded_dirs)

    def parse_note(self, file_path: Path) -> Optional[Note]:
        """
        Parse one file into a note.

        Returns None (and logs) when the file cannot be read, decoded, parsed
        or rendered, so one bad file never stops a corpus load.
        """
        try:
            raw = Path(file_path).read_text(encoding="utf-8")
            return assemble_note(Path(file_path), self.content_root, raw)
        except Exception as exc:
            logger.warning(
                "Failed to parse note",
                extra={"note_path": str(file_path), "error": str(exc)},
                exc_info=True,
            )
            return None

    def load_notes(self) -> List[Note]:
        """Parse every eligible file, in walk order, skipping failures."""
        start_time = time.time()
        files = list(self.iter_note_files())

        workers = min(self.config.parse_workers, len(files)) if files else 1
        if workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                parsed = list(pool.map(self.parse_note, files))
        else:
            parsed = [self.parse_note(path) for path in files]

        notes = [note for note in parsed if note is not None]
        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "Corpus loaded",
            extra={
                "content_root": str(self.content_root),
                "file_count": len(files),
                "note_count": len(notes),
                "failed_count": len(files) - len(notes),
                "duration_ms": f"{duration_ms:.2f}",
            },
        )
        return notes

    def get_note_by_slug(self, slug: str) -> Optional[Note]:
        """
        Find ``<slug>.md``, ``.org`` or ``.csv`` (in that order) and parse it.

        Slugs inside hidden or excluded directories resolve to nothing, as
        the walker never lists them.
        """
        cleaned = (slug or "").strip().strip("/")
        if not cleaned or ".." in PurePosixPath(cleaned).parts or "\\" in cleaned:
            return None
        directories = PurePosixPath(cleaned).parts[:-1]
        if any(_is_excluded_dir(part, self.config.excluded_dirs) for part in directories):
            return None
        root = self.content_root.resolve()
        for fmt in SLUG_LOOKUP_ORDER:
            candidate = (root / f"{cleaned}{fmt.extension}").resolve()
            if not str(candidate).startswith(str(root) + os.sep):
                return None
            if candidate.is_file():
                return self.parse_note(candidate)
        return None

    def get_note_by_id(self, note_id: str) -> Optional[Note]:
        """First note in walk order carrying ``note_id``."""
        for path in self.iter_note_files():
            note = self.parse_note(path)
            if note is not None and note.id == note_id:
                return note
        return None

    def notes_map(self) -> Dict[str, Note]:
        return notes_by_key(self.load_notes())

    def folder_tree(self) -> FolderTree:
        return build_folder_tree(self.load_notes(), self.config.top_level_folders)

    def graph_data(self) -> GraphData:
        return build_graph_data(self.load_notes())

    def build_snapshot(self, fingerprint: Optional[Tuple[int, int]] = None) -> CorpusSnapshot:
        """Read the corpus once and derive the tree and graph from that read."""
        if fingerprint is None:
            fingerprint = corpus_fingerprint(self.content_root, self.config.excluded_dirs)
        notes = self.load_notes()
        return CorpusSnapshot(
            notes=tuple(notes),
            tree=build_folder_tree(notes, self.config.top_level_folders),
            graph=build_graph_data(notes),
            fingerprint=fingerprint,
        )

    def snapshot(self) -> CorpusSnapshot:
        """
        Cached snapshot, rebuilt from scratch whenever the corpus fingerprint
        changes. Nothing is updated incrementally.
        """
        with self._lock:
            fingerprint = corpus_fingerprint(self.content_root, self.config.excluded_dirs)
            if self._snapshot is None or self._snapshot.fingerprint != fingerprint:
                logger.debug(
                    "Rebuilding corpus snapshot",
                    extra={"fingerprint": fingerprint},
                )
                self._snapshot = self.build_snapshot(fingerprint)
            return self._snapshot

    def invalidate(self) -> None:
        with self._lock:
            self._snapshot = None


__all__ = [
    "CorpusSnapshot",
    "NoteParseError",
    "VaultService",
    "assemble_note",
    "compute_slug",
    "corpus_fingerprint",
    "folder_of",
    "iter_note_files",
    "notes_by_key",
]
