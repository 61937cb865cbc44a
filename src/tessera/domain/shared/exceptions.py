"""Shared domain exceptions and error codes.

This module defines the closed catalog of failure conditions and the base
exception hierarchy for the whole service. Every rejected operation ends up
as exactly one ``Failure`` record drawn from ``ErrorCode``.

Failures come in two propagation classes:

- business: caused by caller input or a violated rule. The specific code,
  message and field are surfaced to the caller.
- technical: caused by infrastructure. The caller only ever sees
  ``INTERNAL_ERROR``; the cause is logged.

Anything that is not a ``DomainException`` is treated as technical.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for API clients.

    These codes are part of the public API contract. Should not be changed.
    """

    # General
    INTERNAL_ERROR = "INTERNAL_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_PARAMETERS = "INVALID_PARAMETERS"
    UNSUPPORTED_OPERATION = "UNSUPPORTED_OPERATION"

    # User lifecycle
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    USER_ID_REQUIRED = "USER_ID_REQUIRED"

    # User validation rules
    USER_NAME_REQUIRED = "USER_NAME_REQUIRED"
    USER_EMAIL_REQUIRED = "USER_EMAIL_REQUIRED"
    USER_PASSWORD_REQUIRED = "USER_PASSWORD_REQUIRED"
    USER_ROLE_REQUIRED = "USER_ROLE_REQUIRED"
    USER_NAME_TOO_LONG = "USER_NAME_TOO_LONG"
    USER_EMAIL_TOO_LONG = "USER_EMAIL_TOO_LONG"
    USER_EMAIL_INVALID = "USER_EMAIL_INVALID"

    # Authentication
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_INVALID = "TOKEN_INVALID"
    TOKEN_MISSING = "TOKEN_MISSING"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"

    @property
    def message(self) -> str:
        return _CATALOG[self][0]

    @property
    def field(self) -> str:
        return _CATALOG[self][1]


# code -> (message, offending field)
_CATALOG: dict[ErrorCode, tuple[str, str]] = {
    ErrorCode.INTERNAL_ERROR: ("Something went wrong, please try again", ""),
    ErrorCode.INVALID_REQUEST: ("Bad Request, please verify data", ""),
    ErrorCode.INVALID_PARAMETERS: ("Bad Parameters, please verify data", ""),
    ErrorCode.UNSUPPORTED_OPERATION: ("Method not supported, please try again", ""),
    ErrorCode.USER_ALREADY_EXISTS: ("User with this email already exists", "email"),
    ErrorCode.USER_NOT_FOUND: ("User not found", "id"),
    ErrorCode.USER_ID_REQUIRED: ("User ID is required", "id"),
    ErrorCode.USER_NAME_REQUIRED: ("User name is required", "name"),
    ErrorCode.USER_EMAIL_REQUIRED: ("User email is required", "email"),
    ErrorCode.USER_PASSWORD_REQUIRED: ("User password is required", "password"),
    ErrorCode.USER_ROLE_REQUIRED: ("User role (isAdmin) is required", "isAdmin"),
    ErrorCode.USER_NAME_TOO_LONG: ("User name cannot exceed 100 characters", "name"),
    ErrorCode.USER_EMAIL_TOO_LONG: ("User email cannot exceed 150 characters", "email"),
    ErrorCode.USER_EMAIL_INVALID: ("User email format is invalid", "email"),
    ErrorCode.INVALID_CREDENTIALS: ("Invalid email or password", "credentials"),
    ErrorCode.TOKEN_EXPIRED: ("Token has expired", "token"),
    ErrorCode.TOKEN_INVALID: ("Token is invalid", "token"),
    ErrorCode.TOKEN_MISSING: ("Authentication token is missing", "token"),
    ErrorCode.UNAUTHORIZED: ("Unauthorized access", ""),
    ErrorCode.FORBIDDEN: ("Admin privileges required", ""),
}


class ErrorKind(str, Enum):
    """Propagation class of a failure."""

    BUSINESS = "business"
    TECHNICAL = "technical"


@dataclass(frozen=True)
class Failure:
    """The record attached to every rejected operation."""

    code: str
    message: str
    field: str = ""

    @classmethod
    def of(cls, code: ErrorCode) -> Failure:
        return cls(code=code.value, message=code.message, field=code.field)


@dataclass(frozen=True)
class FailureOutcome:
    """A classified failure, ready to be rendered by any transport."""

    kind: ErrorKind
    failure: Failure


class DomainException(Exception):  # NOQA: N818
    """Base exception for all domain-related errors.

    This exception provides structured error information that can be
    used by the presentation layer to generate consistent API responses.

    Attributes
    ----------
    code
        Stable error code for programmatic handling
    message
        Human-readable error message (safe for end users)
    details
        Optional additional context (logged but not exposed to users)
    """

    kind: ErrorKind = ErrorKind.TECHNICAL

    def __init__(
        self,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(code.message)
        self.code = code
        self.message = code.message
        self.details = details or {}

    @property
    def failure(self) -> Failure:
        return Failure.of(self.code)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"code={self.code.value!r}, "
            f"kind={self.kind.value!r}, "
            f"details={self.details!r})"
        )


class BusinessException(DomainException):
    """Raised when caller input or a business rule is at fault."""

    kind = ErrorKind.BUSINESS


class TechnicalException(DomainException):
    """Raised when a downstream or infrastructure problem prevents an operation."""

    kind = ErrorKind.TECHNICAL


class ValidationError(BusinessException):
    """Raised when input validation fails."""


class ConflictError(BusinessException):
    """Raised when an operation conflicts with existing state."""


class EntityNotFoundError(BusinessException):
    """Raised when a requested entity cannot be found."""


class AuthenticationError(BusinessException):
    """Raised when credentials or a bearer token are not acceptable."""


class AuthorizationError(BusinessException):
    """Raised when an authenticated caller lacks the required role."""

    def __init__(
        self,
        code: ErrorCode = ErrorCode.FORBIDDEN,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(code, details)


class PersistenceError(TechnicalException):
    """Raised when the user store fails for reasons other than emptiness."""


def classify(exc: BaseException) -> FailureOutcome:
    """Collapse any exception into exactly one failure outcome.

    Business exceptions keep their specific code. Technical exceptions and
    anything unrecognised become a generic ``INTERNAL_ERROR``.
    """
    if isinstance(exc, DomainException) and exc.kind is ErrorKind.BUSINESS:
        return FailureOutcome(kind=ErrorKind.BUSINESS, failure=exc.failure)
    return FailureOutcome(
        kind=ErrorKind.TECHNICAL,
        failure=Failure.of(ErrorCode.INTERNAL_ERROR),
    )
