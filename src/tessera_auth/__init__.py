"""Tessera Auth - Generic authentication infrastructure.

This package provides authentication infrastructure that is independent
of the user domain. It handles:
- Password hashing (bcrypt)
- JWT token creation and verification

Architecture:
    tessera_auth/
    ├── services/           # Pure logic (password hashing, JWT)
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from tessera_auth import PasswordHashingService, JWTService
"""

from tessera_auth.exceptions import (
    AuthError,
    InvalidTokenError,
    TokenExpiredError,
)
from tessera_auth.schemas import TokenPayload
from tessera_auth.services import JWTService, PasswordHashingService

__all__ = [
    # Services
    "PasswordHashingService",
    "JWTService",
    # Schemas
    "TokenPayload",
    # Exceptions
    "AuthError",
    "InvalidTokenError",
    "TokenExpiredError",
]
