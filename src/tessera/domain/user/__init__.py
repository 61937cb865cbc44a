"""User domain.

This domain handles:
- User aggregate (identity: id, name, email, password hash, admin flag)
- The persistence port consumed by the application layer
- The ordered validation rules applied before registration and login
"""

from tessera.domain.user.aggregates import User
from tessera.domain.user.exceptions import (
    EmailAlreadyExistsError,
    UserNotFoundError,
    UserValidationError,
)
from tessera.domain.user.repositories import UserRepository
from tessera.domain.user.services import UserValidator
from tessera.domain.user.value_objects import UserRole

__all__ = [
    "EmailAlreadyExistsError",
    "User",
    "UserNotFoundError",
    "UserRepository",
    "UserRole",
    "UserValidationError",
    "UserValidator",
]
