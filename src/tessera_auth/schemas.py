"""Auth schemas and data structures.

These are simple data classes used for transferring token
data between components.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TokenPayload:
    """Decoded JWT token payload.

    This represents the claims extracted from a verified JWT token.
    Claims are trusted only after signature and expiry verification.

    Attributes
    ----------
    user_id
        The unique identifier of the user
    email
        The user's email address
    is_admin
        Whether the user holds the admin role
    issued_at
        Token issue timestamp
    expires_at
        Token expiration timestamp
    """

    user_id: int
    email: str
    is_admin: bool
    issued_at: datetime
    expires_at: datetime
