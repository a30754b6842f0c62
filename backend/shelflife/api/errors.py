"""Translate domain, validation and storage errors into structured JSON responses.

Every error body has the shape ``{"error": message, "code": code, "details"?: str}``.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shelflife.core.config import settings
from shelflife.core.exceptions import (
    DuplicateRecordError,
    ShelfLifeError,
    StoreUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path", "header"}

STORE_FAILURES = (OperationalError, InterfaceError, PoolTimeoutError, ConnectionError)


def _field_name(loc: tuple[Any, ...]) -> str:
    parts = [str(part) for part in loc if part not in _LOCATION_PREFIXES]
    return ".".join(parts) or "request"


def format_validation_errors(errors: list[dict[str, Any]]) -> str:
    """Render pydantic errors as ``field: message`` pairs."""
    return "; ".join(f"{_field_name(tuple(err.get('loc', ())))}: {err.get('msg')}" for err in errors)


async def shelf_life_error_handler(request: Request, exc: ShelfLifeError) -> JSONResponse:
    payload = exc.to_payload()
    if isinstance(exc, DuplicateRecordError) and exc.existing is not None:
        payload["duplicate"] = exc.existing.model_dump(mode="json")

    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.details)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.code)
    return JSONResponse(status_code=exc.status_code, content=payload)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = list(exc.errors())
    field = _field_name(tuple(errors[0].get("loc", ()))) if errors else "request"
    error = ValidationError(field, "Validation failed", format_validation_errors(errors))
    logger.warning("%s %s rejected: %s", request.method, request.url.path, error.details)
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


async def store_failure_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    error = StoreUnavailableError(type(exc).__name__)
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        content: dict[str, Any] = {
            "error": "Resource not found",
            "code": "NOT_FOUND",
            "path": request.url.path,
            "method": request.method,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    else:
        content = {"error": str(exc.detail), "code": f"HTTP_{exc.status_code}"}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    content = {"error": "Internal server error", "code": "INTERNAL_ERROR"}
    if not settings.is_production:
        content["details"] = str(exc)
    return JSONResponse(status_code=500, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShelfLifeError, shelf_life_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    for exc_type in STORE_FAILURES:
        app.add_exception_handler(exc_type, store_failure_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
