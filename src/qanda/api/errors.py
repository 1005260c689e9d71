"""Map the qanda exception hierarchy onto HTTP responses."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi.responses import JSONResponse

from qanda.core.errors import (
    InvalidIdentifierError,
    NotFoundError,
    PersistenceError,
    QandaError,
    ValidationError,
)

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

_STATUS_CODES: dict[type[QandaError], int] = {
    InvalidIdentifierError: 400,
    NotFoundError: 404,
    ValidationError: 422,
}


async def _handle_qanda_error(request: Request, exc: Exception) -> JSONResponse:
    for exc_type, status_code in _STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return JSONResponse(status_code=status_code, content={"detail": str(exc)})
    logger.error(
        "Unhandled error during %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


async def _handle_persistence_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Store failure during %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


def register_error_handlers(app: FastAPI) -> None:
    """Install exception handlers for the qanda error hierarchy."""
    app.add_exception_handler(PersistenceError, _handle_persistence_error)
    app.add_exception_handler(QandaError, _handle_qanda_error)
