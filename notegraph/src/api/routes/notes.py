"""HTTP API routes for note lookups."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from ...models.note import Note, NoteMetadata
from ...services.vault import VaultService
from ..dependencies import get_vault_service

router = APIRouter()

VaultDep = Annotated[VaultService, Depends(get_vault_service)]


def _not_found(kind: str, key: str) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail={"error": "not_found", "message": f"No note with {kind} '{key}'"},
    )


@router.get("/api/notes", response_model=list[NoteMetadata])
def list_notes(vault_service: VaultDep):
    """List metadata for every note, in corpus order."""
    try:
        return [note.summary() for note in vault_service.snapshot().notes]
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to list notes: {str(e)}")


@router.get("/api/notes/by-id/{note_id}", response_model=Note)
def get_note_by_id(note_id: str, vault_service: VaultDep):
    """Fetch a note by its identifier."""
    note = vault_service.get_note_by_id(note_id)
    if note is None:
        raise _not_found("id", note_id)
    return note


@router.get("/api/notes/{slug:path}/backlinks", response_model=list[NoteMetadata])
def get_backlinks(slug: str, vault_service: VaultDep):
    """Notes that link to the note at ``slug``."""
    snapshot = vault_service.snapshot()
    note = snapshot.get(slug)
    if note is None:
        raise _not_found("slug", slug)
    return snapshot.backlinks(note.id)


@router.get("/api/notes/{slug:path}", response_model=Note)
def get_note(slug: str, vault_service: VaultDep):
    """Fetch a note by slug (path without extension)."""
    note = vault_service.get_note_by_slug(slug)
    if note is None:
        raise _not_found("slug", slug)
    return note
