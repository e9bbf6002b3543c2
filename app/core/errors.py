# app/core/errors.py
from __future__ import annotations


class DomainError(ValueError):
    """Base for every failure a service raises on purpose."""


class NotFoundError(DomainError):
    pass


class ConflictError(DomainError):
    pass


class DuplicateRequestError(ConflictError):
    pass


class InvalidStateTransitionError(DomainError):
    pass
