"""Shared FastAPI dependencies."""

from __future__ import annotations

from functools import lru_cache

from ..services.vault import VaultService


@lru_cache(maxsize=1)
def get_vault_service() -> VaultService:
    """Process-wide vault service so its snapshot cache is shared across requests."""
    return VaultService()


__all__ = ["get_vault_service"]
