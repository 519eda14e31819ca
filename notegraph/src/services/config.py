"""Application configuration helpers."""

from __future__ import annotations

from functools import lru_cache
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_CONTENT_ROOT = PROJECT_ROOT / "content" / "notes"
DEFAULT_TOP_LEVEL_FOLDERS = ("cards", "index", "jottings", "lecture", "marginalia", "slipbox")
DEFAULT_EXCLUDED_DIRS = ("node_modules",)
CARDS_FOLDER = "cards"
PACKAGE_LOGGER = "notegraph"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseModel):
    """Runtime configuration loaded from environment variables."""

    model_config = ConfigDict(frozen=True)

    content_root: Path = Field(..., description="Directory holding the note corpus")
    top_level_folders: tuple[str, ...] = Field(
        default=DEFAULT_TOP_LEVEL_FOLDERS,
        description="Folders always present at the top of the tree, in display order",
    )
    excluded_dirs: tuple[str, ...] = Field(
        default=DEFAULT_EXCLUDED_DIRS,
        description="Directory names never walked (hidden directories are always skipped)",
    )
    parse_workers: int = Field(default=1, ge=1, description="Threads used to parse files")
    log_level: str = Field(default="INFO")

    @field_validator("content_root", mode="before")
    @classmethod
    def _normalize_content_root(cls, value: str | Path | None) -> Path:
        if value is None or value == "":
            raise ValueError("CONTENT_ROOT is required")
        if isinstance(value, Path):
            path = value
        else:
            path = Path(value)
        return path.expanduser().resolve()

    @field_validator("top_level_folders", "excluded_dirs", mode="before")
    @classmethod
    def _split_names(cls, value: str | tuple[str, ...] | list[str] | None) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            value = value.split(",")
        return tuple(name.strip() for name in value if name and name.strip())

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"


def _read_env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(key, default)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Load and cache application configuration."""
    content_root = _read_env("CONTENT_ROOT", str(DEFAULT_CONTENT_ROOT))
    top_level = _read_env("TOP_LEVEL_FOLDERS", ",".join(DEFAULT_TOP_LEVEL_FOLDERS))
    excluded = _read_env("EXCLUDED_DIRS", ",".join(DEFAULT_EXCLUDED_DIRS))
    workers_raw = _read_env("PARSE_WORKERS", "1") or "1"
    try:
        parse_workers = int(workers_raw)
    except ValueError as exc:
        raise ValueError(f"PARSE_WORKERS must be an integer, got {workers_raw!r}") from exc
    log_level = _read_env("LOG_LEVEL", "INFO")

    # A missing content root is an empty corpus, so it is not created here.
    return AppConfig(
        content_root=content_root,
        top_level_folders=top_level,
        excluded_dirs=excluded,
        parse_workers=parse_workers,
        log_level=log_level,
    )


def reload_config() -> AppConfig:
    """Clear cached config (useful for tests) and reload."""
    get_config.cache_clear()
    return get_config()


def configure_logging(level: str = "INFO") -> None:
    """
    Give the package loggers ``level`` and make sure records reach a console.

    ``basicConfig`` is a no-op when the root logger already has handlers
    (uvicorn or pytest installed them), so only the level is applied then.
    """
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger(PACKAGE_LOGGER).setLevel(
        getattr(logging, level.upper(), logging.INFO)
    )


__all__ = [
    "AppConfig",
    "get_config",
    "reload_config",
    "configure_logging",
    "PROJECT_ROOT",
    "DEFAULT_CONTENT_ROOT",
    "DEFAULT_TOP_LEVEL_FOLDERS",
    "DEFAULT_EXCLUDED_DIRS",
    "CARDS_FOLDER",
    "LOG_FORMAT",
    "PACKAGE_LOGGER",
]
