"""Mapping of store errors onto HTTP responses."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from dodel.services.errors import (
    AlreadyVotedError,
    InvalidInputError,
    NotFoundError,
    PersistenceError,
    StoreError,
)

STATUS_BY_ERROR: dict[type[StoreError], int] = {
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    AlreadyVotedError: status.HTTP_409_CONFLICT,
    PersistenceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: Exception) -> int:
    """Return the HTTP status code for a store error."""
    for error_type, code in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def store_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a store error as a JSON ``detail`` response."""
    return JSONResponse(status_code=status_for(exc), content={"detail": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    """Install the store error handler on an application."""
    app.add_exception_handler(StoreError, store_error_handler)
