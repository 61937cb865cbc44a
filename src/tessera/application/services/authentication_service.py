"""Authentication service for login and token validation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from tessera.application.dtos import LoginResult
from tessera.domain.shared import AuthenticationError, ErrorCode
from tessera.domain.user import UserValidator
from tessera_auth import InvalidTokenError, TokenExpiredError

if TYPE_CHECKING:
    from tessera.domain.user import UserRepository
    from tessera_auth import JWTService, PasswordHashingService, TokenPayload

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates tessera_auth infrastructure (password hashing, JWT tokens)
    with the tessera User domain to provide:
    - Login with email and password
    - Bearer token validation

    This service is the bridge between the generic auth infrastructure
    and the domain error taxonomy: everything it raises is a
    ``DomainException`` carrying a stable ``ErrorCode``.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
        validator: Optional[UserValidator] = None,
    ):
        self._user_repo = user_repository
        self._password_service = password_service
        self._jwt_service = jwt_service
        self._validator = validator or UserValidator()

    async def login(
        self,
        email: Optional[str],
        password: Optional[str],
        message_id: str = "",
    ) -> LoginResult:
        """Check credentials and mint an access token.

        An unknown email and a wrong password produce the same
        ``INVALID_CREDENTIALS`` failure.

        Raises
        ------
        UserValidationError
            If the email or password is missing or blank
        AuthenticationError
            With ``INVALID_CREDENTIALS`` if the credentials do not match
        """
        self._validator.validate_credentials(email, password)

        user = await self._user_repo.find_by_email(email)
        if user is None:
            logger.warning("[%s] Login rejected", message_id)
            raise AuthenticationError(ErrorCode.INVALID_CREDENTIALS)

        if not await self._password_service.verify_async(password, user.password):
            logger.warning("[%s] Login rejected", message_id)
            raise AuthenticationError(ErrorCode.INVALID_CREDENTIALS)

        token = self._jwt_service.create_access_token(
            user_id=user.id,
            email=user.email,
            is_admin=bool(user.is_admin),
        )

        logger.info("[%s] User %s logged in", message_id, user.id)
        return LoginResult(
            token=token,
            user_id=user.id,
            email=user.email,
            is_admin=bool(user.is_admin),
        )

    def validate_token(self, token: Optional[str]) -> TokenPayload:
        if token is None or not token.strip():
            raise AuthenticationError(ErrorCode.TOKEN_MISSING)

        try:
            return self._jwt_service.verify_token(token)
        except TokenExpiredError as e:
            raise AuthenticationError(ErrorCode.TOKEN_EXPIRED) from e
        except InvalidTokenError as e:
            raise AuthenticationError(ErrorCode.TOKEN_INVALID) from e
