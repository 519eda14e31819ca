from fastapi import APIRouter, Depends, HTTPException
from typing import Annotated

from ...models.graph import GraphData
from ...services.vault import VaultService
from ..dependencies import get_vault_service

router = APIRouter()

@router.get("/api/graph", response_model=GraphData)
def get_graph_data(
    vault_service: Annotated[VaultService, Depends(get_vault_service)],
) -> GraphData:
    """Retrieve graph visualization data."""
    try:
        return vault_service.snapshot().graph
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to build graph data: {str(e)}")
