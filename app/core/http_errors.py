# app/core/http_errors.py
from __future__ import annotations

from fastapi import HTTPException

from app.core.errors import ConflictError, InvalidStateTransitionError, NotFoundError


def to_http_exception(exc: Exception) -> HTTPException:
    """
    Map service exceptions to HTTP errors.
    """
    msg = str(exc)
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=msg)
    if isinstance(exc, (ConflictError, InvalidStateTransitionError)):
        return HTTPException(status_code=409, detail=msg)
    if isinstance(exc, PermissionError):
        return HTTPException(status_code=403, detail=msg)
    return HTTPException(status_code=400, detail=msg)
