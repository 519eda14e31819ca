"""Entry point for running the FastAPI application."""

import os

import uvicorn
from dotenv import load_dotenv

load_dotenv()

if __name__ == "__main__":
    from notegraph.src.services.config import configure_logging, get_config

    configure_logging(get_config().log_level)

    # PORT=7860 python -m notegraph.main
    port = int(os.getenv("PORT", "8000"))

    uvicorn.run(
        "notegraph.src.api.main:app",
        host="0.0.0.0",
        port=port,
        reload=os.getenv("RELOAD", "false").lower() in {"1", "true", "yes"},
    )
