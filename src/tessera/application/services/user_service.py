"""User service for registration and user lookups."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional

from tessera.domain.shared import ErrorCode
from tessera.domain.user import (
    EmailAlreadyExistsError,
    User,
    UserNotFoundError,
    UserValidationError,
    UserValidator,
)

if TYPE_CHECKING:
    from tessera.domain.user import UserRepository
    from tessera_auth import PasswordHashingService

logger = logging.getLogger(__name__)


class UserService:
    """
    Application service for the user lifecycle.

    Registration runs the ordered validation rules first, then the
    uniqueness check, then hashing, and writes at most once. Any failure
    short-circuits the remaining steps, so a rejected registration never
    reaches ``save``.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
        validator: Optional[UserValidator] = None,
    ):
        self._user_repo = user_repository
        self._password_service = password_service
        self._validator = validator or UserValidator()

    async def register(self, candidate: User, message_id: str = "") -> User:
        """Validate, hash and persist a new user.

        Parameters
        ----------
        candidate
            Unvalidated user carrying the raw password
        message_id
            Correlation id of the calling request, used for logging only

        Returns
        -------
        The stored user, with its store-assigned id and the password hash

        Raises
        ------
        UserValidationError
            If the candidate breaks one of the validation rules
        EmailAlreadyExistsError
            If the email is already registered
        """
        logger.info("[%s] Registering user", message_id)

        self._validator.validate(candidate)

        if await self._user_repo.exists_by_email(candidate.email):
            logger.warning("[%s] Email already registered", message_id)
            raise EmailAlreadyExistsError(candidate.email)

        password_hash = await self._password_service.hash_async(candidate.password)
        saved = await self._user_repo.save(candidate.with_password_hash(password_hash))

        logger.info("[%s] User registered with id %s", message_id, saved.id)
        return saved

    async def get_user_by_id(self, user_id: Optional[int], message_id: str = "") -> User:
        if user_id is None:
            raise UserValidationError(ErrorCode.USER_ID_REQUIRED)

        logger.debug("[%s] Looking up user %s", message_id, user_id)
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def check_users_exist(
        self,
        user_ids: Optional[Sequence[int]],
        message_id: str = "",
    ) -> dict[int, bool]:
        """Map every requested id to whether a user with that id exists.

        An empty or missing id list yields an empty mapping without
        touching the store.
        """
        if not user_ids:
            return {}

        logger.debug("[%s] Checking existence of %d users", message_id, len(user_ids))
        existing = set(await self._user_repo.find_existing_ids(user_ids))
        return {user_id: user_id in existing for user_id in user_ids}

    async def get_users_by_ids(
        self,
        user_ids: Optional[Sequence[int]],
        message_id: str = "",
    ) -> list[User]:
        if not user_ids:
            return []

        logger.debug("[%s] Fetching %d users", message_id, len(user_ids))
        return await self._user_repo.find_all_by_ids(user_ids)
