"""Translate engine exceptions into HTTP errors."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from ..errors import (
    CapacityExceededError,
    NoCoverageError,
    NotFoundError,
    WorkloadUnavailableError,
)


def to_http_exception(exc: Exception) -> HTTPException:
    """Map a domain exception to a status code. Call from inside an except block."""
    if isinstance(exc, HTTPException):
        return exc
    if isinstance(exc, (NotFoundError, WorkloadUnavailableError)):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, (NoCoverageError, CapacityExceededError, ValueError)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, ConnectionError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Backend connection error: {exc}",
        )
    logging.exception(f"Unexpected error handling request: {exc}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
