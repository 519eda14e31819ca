"""System routes for health and recent diagnostics."""

import logging
from collections import deque
from datetime import datetime
from typing import Annotated, Any, Dict, List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...services.config import PACKAGE_LOGGER
from ...services.vault import VaultService
from ..dependencies import get_vault_service

router = APIRouter()

# Recent log records, newest last. Per-file parse failures land here.
LOG_BUFFER: deque = deque(maxlen=100)

_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}


class LogEntry(BaseModel):
    timestamp: str
    level: str
    logger: str
    message: str
    extra: Dict[str, Any]


class HealthResponse(BaseModel):
    status: str
    note_count: int
    content_root: str


class MemoryLogHandler(logging.Handler):
    """Capture log records from the notegraph loggers into memory."""

    def emit(self, record):
        try:
            msg = self.format(record)
            extra = {
                k: v if isinstance(v, (str, int, float, bool)) or v is None else str(v)
                for k, v in record.__dict__.items()
                if k not in _RECORD_ATTRS
            }
            LOG_BUFFER.append(
                {
                    "timestamp": datetime.fromtimestamp(record.created).isoformat(),
                    "level": record.levelname,
                    "logger": record.name,
                    "message": msg,
                    "extra": extra,
                }
            )
        except Exception:
            self.handleError(record)


memory_handler = MemoryLogHandler()
memory_handler.setFormatter(logging.Formatter("%(message)s"))


def install_log_buffer(logger_name: str = PACKAGE_LOGGER) -> None:
    """Attach the in-memory handler once to the package logger."""
    target = logging.getLogger(logger_name)
    if memory_handler not in target.handlers:
        target.addHandler(memory_handler)


@router.get("/health", response_model=HealthResponse)
def health(vault_service: Annotated[VaultService, Depends(get_vault_service)]):
    """Liveness plus the size of the current corpus."""
    snapshot = vault_service.snapshot()
    return HealthResponse(
        status="ok",
        note_count=len(snapshot.notes),
        content_root=str(vault_service.content_root),
    )


@router.get("/api/system/logs", response_model=List[LogEntry])
def get_logs(level: str | None = None):
    """Retrieve recent log records, optionally filtered by level name."""
    entries = list(LOG_BUFFER)
    if level:
        wanted = level.upper()
        entries = [entry for entry in entries if entry["level"] == wanted]
    return entries
