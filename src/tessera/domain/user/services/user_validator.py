"""Ordered validation rules for candidate users and login credentials.

Rules run in a fixed order and the first failing rule wins; violations are
never accumulated. Presence checks come before length checks, and length
checks before the format check, so a missing or oversized field is never
reported as a malformed one.
"""

from __future__ import annotations

import re
from typing import Callable

from tessera.domain.shared.exceptions import ErrorCode
from tessera.domain.user.aggregates.user import User
from tessera.domain.user.exceptions import UserValidationError

MAX_NAME_LENGTH = 100
MAX_EMAIL_LENGTH = 150
EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


Rule = tuple[Callable[[User], bool], ErrorCode]

# (predicate that is True when the rule is broken, code to report)
USER_RULES: tuple[Rule, ...] = (
    (lambda u: _is_blank(u.name), ErrorCode.USER_NAME_REQUIRED),
    (lambda u: _is_blank(u.email), ErrorCode.USER_EMAIL_REQUIRED),
    (lambda u: _is_blank(u.password), ErrorCode.USER_PASSWORD_REQUIRED),
    (lambda u: u.is_admin is None, ErrorCode.USER_ROLE_REQUIRED),
    (lambda u: len(u.name) > MAX_NAME_LENGTH, ErrorCode.USER_NAME_TOO_LONG),
    (lambda u: len(u.email) > MAX_EMAIL_LENGTH, ErrorCode.USER_EMAIL_TOO_LONG),
    (lambda u: EMAIL_PATTERN.fullmatch(u.email) is None, ErrorCode.USER_EMAIL_INVALID),
)


class UserValidator:
    """Synchronous, side-effect free checks run before any I/O."""

    def validate(self, user: User) -> None:
        """Raise ``UserValidationError`` for the first broken rule.

        Parameters
        ----------
        user
            The candidate user, typically freshly built from request data

        Raises
        ------
        UserValidationError
            Carrying the code of the earliest rule that failed
        """
        for is_broken, code in USER_RULES:
            if is_broken(user):
                raise UserValidationError(code)

    def validate_credentials(self, email: str | None, password: str | None) -> None:
        """Check a login attempt's shape: email first, then password."""
        if _is_blank(email):
            raise UserValidationError(ErrorCode.USER_EMAIL_REQUIRED)
        if _is_blank(password):
            raise UserValidationError(ErrorCode.USER_PASSWORD_REQUIRED)
