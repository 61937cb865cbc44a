"""Pydantic schemas for API request/response models."""

from tessera.presentation.api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    PrincipalResponse,
)
from tessera.presentation.api.schemas.users import (
    CreateUserRequest,
    UserIdsRequest,
    UserResponse,
)

__all__ = [
    "CreateUserRequest",
    "LoginRequest",
    "LoginResponse",
    "PrincipalResponse",
    "UserIdsRequest",
    "UserResponse",
]
