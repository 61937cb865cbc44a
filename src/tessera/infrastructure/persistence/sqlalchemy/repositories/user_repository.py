"""SQLAlchemy implementation of UserRepository."""

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tessera.domain.shared import PersistenceError
from tessera.domain.user import EmailAlreadyExistsError, User, UserRepository
from tessera.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface.

    Driver and connection errors are re-raised as ``PersistenceError`` so
    that they surface as a generic internal failure. A unique-constraint
    violation on insert is the one store error with business meaning and
    becomes ``EmailAlreadyExistsError``.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @contextmanager
    def _store_errors(self) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            logger.exception("User store operation failed")
            raise PersistenceError(details={"cause": type(e).__name__}) from e

    async def save(self, user: User) -> User:
        existing = await self._find_model_by_id(user.id) if user.is_persisted else None

        try:
            if existing is not None:
                self._update_model(existing, user)
                model = existing
            else:
                model = self._map_to_model(user)
                self._session.add(model)

            await self._session.flush()
        except IntegrityError as e:
            logger.warning("Unique constraint rejected user insert")
            raise EmailAlreadyExistsError(user.email) from e
        except SQLAlchemyError as e:
            logger.exception("Failed to save user")
            raise PersistenceError(details={"cause": type(e).__name__}) from e

        logger.debug("Saved user: %s", model.id)
        return self._map_to_domain(model)

    async def find_by_id(self, user_id: int) -> User | None:
        model = await self._find_model_by_id(user_id)

        if model is None:
            return None

        return self._map_to_domain(model)

    async def find_by_email(self, email: str) -> User | None:
        stmt = select(UserModel).where(UserModel.email == email)
        with self._store_errors():
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def exists_by_email(self, email: str) -> bool:
        stmt = select(UserModel.id).where(UserModel.email == email).limit(1)
        with self._store_errors():
            result = await self._session.execute(stmt)
            return result.scalar_one_or_none() is not None

    async def find_existing_ids(self, user_ids: Sequence[int]) -> list[int]:
        if not user_ids:
            return []

        stmt = select(UserModel.id).where(UserModel.id.in_(user_ids))
        with self._store_errors():
            result = await self._session.execute(stmt)
            return list(result.scalars().all())

    async def find_all_by_ids(self, user_ids: Sequence[int]) -> list[User]:
        if not user_ids:
            return []

        stmt = (
            select(UserModel)
            .where(UserModel.id.in_(user_ids))
            .order_by(UserModel.id)
        )
        with self._store_errors():
            result = await self._session.execute(stmt)
            models = result.scalars().all()
        return [self._map_to_domain(model) for model in models]

    async def _find_model_by_id(self, user_id: int) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        with self._store_errors():
            result = await self._session.execute(stmt)
            return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            name=model.name,
            email=model.email,
            password_hash=model.password,
            is_admin=model.is_admin,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            name=user.name,
            email=user.email,
            password=user.password,
            is_admin=bool(user.is_admin),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        model.name = user.name
        model.email = user.email
        model.password = user.password
        model.is_admin = bool(user.is_admin)
        model.updated_at = user.updated_at
