"""User repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Optional

from tessera.domain.user.aggregates.user import User


class UserRepository(ABC):
    """Repository interface for User aggregates.

    Lookups return ``None`` or an empty list when nothing matches; emptiness
    is never an error.
    """

    @abstractmethod
    async def save(self, user: User) -> User:
        """Persist a user and return the stored representation (with id)."""

    @abstractmethod
    async def find_by_id(self, user_id: int) -> Optional[User]:
        """Find a user by their ID."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email address."""

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check if a user exists with the given email."""

    @abstractmethod
    async def find_existing_ids(self, user_ids: Sequence[int]) -> list[int]:
        """Return the subset of ``user_ids`` that belong to stored users."""

    @abstractmethod
    async def find_all_by_ids(self, user_ids: Sequence[int]) -> list[User]:
        """Return every stored user whose id is in ``user_ids``."""
