"""User domain exceptions.

Custom exceptions for the user domain, used for validation
and business rule violations.
"""

from tessera.domain.shared.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class UserValidationError(ValidationError):
    """A candidate user or a credentials pair broke one of the ordered rules."""


class EmailAlreadyExistsError(ConflictError):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        super().__init__(ErrorCode.USER_ALREADY_EXISTS, details={"email": email})
        self.email = email


class UserNotFoundError(EntityNotFoundError):
    """User not found."""

    def __init__(self, user_id: int) -> None:
        super().__init__(ErrorCode.USER_NOT_FOUND, details={"user_id": user_id})
        self.user_id = user_id
