"""JWT token service.

Provides JWT token creation and verification for authentication.
"""

from datetime import datetime, timedelta, timezone

import jwt

from tessera_auth.exceptions import InvalidTokenError, TokenExpiredError
from tessera_auth.schemas import TokenPayload


class JWTService:
    """Service for JWT token creation and verification.

    Tokens are self-contained: nothing about an issued token is stored
    server-side, so verification needs only the signing secret.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.create_access_token(42, "user@example.com", False)
    >>> payload = service.verify_token(token)
    >>> print(payload.user_id)
    42
    """

    DEFAULT_ACCESS_EXPIRE_SECONDS = 3600
    ALGORITHM = "HS256"
    REQUIRED_CLAIMS = ("sub", "email", "is_admin", "iat", "exp")

    def __init__(
        self,
        secret_key: str,
        access_token_expire_seconds: int = DEFAULT_ACCESS_EXPIRE_SECONDS,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        access_token_expire_seconds
            Seconds until an access token expires (default 3600)
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._access_expire = timedelta(seconds=access_token_expire_seconds)

    @property
    def access_token_ttl(self) -> timedelta:
        return self._access_expire

    def create_access_token(
        self,
        user_id: int,
        email: str,
        is_admin: bool,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a signed access token.

        Parameters
        ----------
        user_id
            The user's unique identifier
        email
            The user's email address
        is_admin
            The user's admin flag
        expires_delta
            Custom expiration time (optional)

        Returns
        -------
        The encoded JWT token string
        """
        now = datetime.now(tz=timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else self._access_expire)

        payload = {
            "sub": str(user_id),
            "email": email,
            "is_admin": bool(is_admin),
            "iat": now,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify and decode a JWT token.

        Parameters
        ----------
        token
            The JWT token string to verify

        Returns
        -------
        TokenPayload containing the decoded claims

        Raises
        ------
        TokenExpiredError
            If the token is correctly signed but its expiry has passed
        InvalidTokenError
            If the token is tampered with, malformed, or misses claims
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": list(self.REQUIRED_CLAIMS)},
            )

            user_id = int(payload["sub"])
            email = payload["email"]
            is_admin = payload["is_admin"]
            if not isinstance(email, str) or not isinstance(is_admin, bool):
                msg = "email or is_admin claim has the wrong type"
                raise TypeError(msg)

            return TokenPayload(
                user_id=user_id,
                email=email,
                is_admin=is_admin,
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )

        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e
