"""Application layer services."""

from tessera.application.services.authentication_service import (
    AuthenticationService,
)
from tessera.application.services.user_service import UserService

__all__ = [
    "AuthenticationService",
    "UserService",
]
