from tessera.domain.user.services.user_validator import (
    EMAIL_PATTERN,
    MAX_EMAIL_LENGTH,
    MAX_NAME_LENGTH,
    UserValidator,
)

__all__ = ["EMAIL_PATTERN", "MAX_EMAIL_LENGTH", "MAX_NAME_LENGTH", "UserValidator"]
