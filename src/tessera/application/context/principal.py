"""Principal: the authenticated identity attached to a request."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tessera.domain.user import UserRole

if TYPE_CHECKING:
    from tessera_auth import TokenPayload


@dataclass(frozen=True)
class Principal:
    """
    Immutable identity of the caller, built from verified token claims.

    It is created once per request by the authentication middleware and
    never touches the user store; everything it knows comes from the token.
    The ``is_authenticated`` and ``display_name`` properties make it usable
    as ``request.user`` in Starlette.
    """

    user_id: int
    email: str
    is_admin: bool

    @classmethod
    def from_token(cls, payload: TokenPayload) -> Principal:
        return cls(
            user_id=payload.user_id,
            email=payload.email,
            is_admin=payload.is_admin,
        )

    @property
    def role(self) -> UserRole:
        return UserRole.from_admin_flag(self.is_admin)

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def display_name(self) -> str:
        return self.email

    def __str__(self) -> str:
        return f"Principal({self.email})"
