"""HTTP API route for the sidebar folder tree."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from ...models.tree import FolderTree
from ...services.vault import VaultService
from ..dependencies import get_vault_service

router = APIRouter()


@router.get("/api/tree", response_model=FolderTree)
def get_folder_tree(
    vault_service: Annotated[VaultService, Depends(get_vault_service)],
) -> FolderTree:
    """Folder hierarchy with the fixed top-level folders first."""
    try:
        return vault_service.snapshot().tree
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to build folder tree: {str(e)}")
