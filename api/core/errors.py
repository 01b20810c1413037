"""
Global exception handlers.

Feature code raises `HTTPException` for its own policy failures and lets
asyncpg errors propagate; this module turns both into JSON responses of the
form `{"detail": ...}`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, TypeVar

import asyncpg
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import config
from .db import DatabaseUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Client-side store failures: the request itself was wrong.
_BAD_REQUEST_ERRORS: tuple[type[asyncpg.PostgresError], ...] = (
    asyncpg.ForeignKeyViolationError,
    asyncpg.NotNullViolationError,
    asyncpg.CheckViolationError,
    asyncpg.DataError,
)


def ensure_found(record: T | None, detail: str) -> T | None:
    """
    Apply the not-found policy to a single-record result.

    By default a missing record is passed through as `None` (the route answers
    `200 null`). With STRICT_NOT_FOUND enabled it becomes a 404.
    """
    if record is None and config.strict_not_found():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return record


def _error(status_code: int, detail: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": jsonable_encoder(detail)})


def _without_input(errors: Sequence[Any]) -> list[dict[str, Any]]:
    # `input` echoes the submitted body, passwords included.
    return [{k: v for k, v in dict(e).items() if k != "input"} for e in errors]


def _postgres_status(exc: asyncpg.PostgresError) -> tuple[int, str]:
    if isinstance(exc, asyncpg.UniqueViolationError):
        return status.HTTP_409_CONFLICT, "A record with the same unique value already exists."
    if isinstance(exc, asyncpg.ForeignKeyViolationError):
        return status.HTTP_400_BAD_REQUEST, "Referenced record does not exist."
    if isinstance(exc, _BAD_REQUEST_ERRORS):
        return status.HTTP_400_BAD_REQUEST, "Record violates the store schema."
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error."


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        response = _error(exc.status_code, exc.detail)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = _without_input(exc.errors())
        logger.warning("validation_failed path=%s errors=%s", request.url.path, errors)
        return _error(status.HTTP_400_BAD_REQUEST, errors)

    @app.exception_handler(asyncpg.PostgresError)
    async def postgres_error_handler(request: Request, exc: asyncpg.PostgresError) -> JSONResponse:
        status_code, detail = _postgres_status(exc)
        if status_code >= 500:
            logger.error("store_error path=%s error=%s", request.url.path, exc, exc_info=exc)
        else:
            logger.info("store_rejected path=%s error=%s", request.url.path, exc)
        return _error(status_code, detail)

    @app.exception_handler(DatabaseUnavailableError)
    async def unavailable_handler(request: Request, exc: DatabaseUnavailableError) -> JSONResponse:
        logger.error("store_unavailable path=%s error=%s", request.url.path, exc)
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "Database is unavailable.")

    @app.exception_handler(asyncpg.InterfaceError)
    async def interface_error_handler(request: Request, exc: asyncpg.InterfaceError) -> JSONResponse:
        logger.error("store_connection_error path=%s error=%s", request.url.path, exc)
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "Database is unavailable.")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_error path=%s", request.url.path, exc_info=exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error.")
