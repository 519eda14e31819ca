"""Exception handlers that wrap every API error as ``{"error", "message", "detail"}``."""

from __future__ import annotations

from http import HTTPStatus
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# Machine-readable codes for the statuses a read-only API can answer with.
ERROR_CODES: Dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "validation_error",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "internal_error",
}


def error_body(status_code: int, detail: Any = None) -> Dict[str, Any]:
    """
    Build the error envelope for ``status_code``.

    A string ``detail`` becomes the message. A dict may set any of the three
    envelope keys itself (route handlers raise ``{"error", "message"}``).
    """
    body: Dict[str, Any] = {
        "error": ERROR_CODES.get(status_code, "internal_error"),
        "message": HTTPStatus(status_code).phrase,
        "detail": None,
    }
    if isinstance(detail, dict):
        body.update({key: detail[key] for key in body if key in detail})
    elif isinstance(detail, str) and detail:
        body["message"] = detail
    return body


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    body = error_body(status.HTTP_400_BAD_REQUEST)
    body["detail"] = {"errors": jsonable_encoder(exc.errors())}
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def internal_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc, extra={"path": request.url.path})
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(status.HTTP_500_INTERNAL_SERVER_ERROR),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach shared exception handlers to the FastAPI application."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, internal_exception_handler)


__all__ = [
    "ERROR_CODES",
    "error_body",
    "register_error_handlers",
    "validation_exception_handler",
    "http_exception_handler",
    "internal_exception_handler",
]
