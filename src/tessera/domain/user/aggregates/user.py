"""User aggregate."""

from __future__ import annotations

from datetime import datetime

from tessera.domain.shared.time import utc_now
from tessera.domain.user.value_objects import UserRole


class User:
    """
    User aggregate root.

    A user starts life as an unvalidated candidate built from untrusted
    input, so every field may be ``None`` until the validation rules have
    run. The id stays ``None`` until the store assigns one. Once the
    registration flow has run, ``password`` holds a bcrypt hash and never
    the raw value.
    """

    def __init__(
        self,
        name: str | None,
        email: str | None,
        password: str | None,
        is_admin: bool | None,
        id: int | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._id = id
        self._name = name
        self._email = email
        self._password = password
        self._is_admin = is_admin
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def email(self) -> str | None:
        return self._email

    @property
    def password(self) -> str | None:
        return self._password

    @property
    def is_admin(self) -> bool | None:
        return self._is_admin

    @property
    def role(self) -> UserRole:
        return UserRole.from_admin_flag(bool(self._is_admin))

    @property
    def is_persisted(self) -> bool:
        return self._id is not None

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def with_password_hash(self, password_hash: str) -> User:
        """Return a copy whose password is replaced by its hash."""
        return User(
            id=self._id,
            name=self._name,
            email=self._email,
            password=password_hash,
            is_admin=self._is_admin,
            created_at=self._created_at,
            updated_at=utc_now(),
        )

    @classmethod
    def create(
        cls,
        name: str | None,
        email: str | None,
        password: str | None,
        is_admin: bool | None,
    ) -> User:
        return cls(name=name, email=email, password=password, is_admin=is_admin)

    @classmethod
    def reconstitute(
        cls,
        id: int,
        name: str,
        email: str,
        password_hash: str,
        is_admin: bool,
        created_at: datetime,
        updated_at: datetime,
    ) -> User:
        return cls(
            id=id,
            name=name,
            email=email,
            password=password_hash,
            is_admin=is_admin,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        if self._id is None or other._id is None:
            return self is other
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id) if self._id is not None else id(self)

    def __repr__(self) -> str:
        # password intentionally left out
        return f"User(id={self._id}, email={self._email}, is_admin={self._is_admin})"
