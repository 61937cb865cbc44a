"""Result of a successful login."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LoginResult:
    """The minted token together with the claims it carries."""

    token: str
    user_id: int
    email: str
    is_admin: bool
