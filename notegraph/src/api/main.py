"""FastAPI application main entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from ..services.config import configure_logging, get_config
from .dependencies import get_vault_service
from .middleware import register_error_handlers
from .routes import graph, notes, system, tree

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan handler: configure logging and warm the corpus snapshot."""
    configure_logging(get_config().log_level)
    system.install_log_buffer()
    logger.info("Running startup: reading note corpus...")
    try:
        snapshot = get_vault_service().snapshot()
        logger.info(
            "Startup complete: corpus ready",
            extra={"note_count": len(snapshot.notes)},
        )
    except Exception as exc:
        logger.exception("Startup failed: %s", exc)
        logger.error("App starting without a warm corpus snapshot")
    yield


app = FastAPI(
    title="Notegraph API",
    description="Read-only notes, folder tree and link graph for a personal knowledge base",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:3000",
    ],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(notes.router, tags=["notes"])
app.include_router(tree.router, tags=["tree"])
app.include_router(graph.router, tags=["graph"])
app.include_router(system.router, tags=["system"])
