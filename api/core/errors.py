"""
Shared error pipeline.

Operations raise `ApiError` (or let driver errors propagate); the handlers
registered here turn them into `{"message": ...}` responses.
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    logger.info(
        "api_error method=%s path=%s status=%s message=%s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def database_error_handler(
    request: Request,
    exc: asyncpg.PostgresError | asyncpg.InterfaceError,
) -> JSONResponse:
    logger.exception("database_error method=%s path=%s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Database error."})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(asyncpg.PostgresError, database_error_handler)
    # Client-side failures, e.g. a parameter that cannot be encoded.
    app.add_exception_handler(asyncpg.InterfaceError, database_error_handler)
