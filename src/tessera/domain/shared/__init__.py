"""Shared domain building blocks."""

from tessera.domain.shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BusinessException,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ErrorKind,
    Failure,
    FailureOutcome,
    PersistenceError,
    TechnicalException,
    ValidationError,
    classify,
)
from tessera.domain.shared.time import utc_now

__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "BusinessException",
    "ConflictError",
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "ErrorKind",
    "Failure",
    "FailureOutcome",
    "PersistenceError",
    "TechnicalException",
    "ValidationError",
    "classify",
    "utc_now",
]
