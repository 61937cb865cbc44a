from enum import Enum


class UserRole(str, Enum):
    """Single role derived from the admin flag; no hierarchy beyond this."""

    USER = "user"
    ADMIN = "admin"

    @classmethod
    def from_admin_flag(cls, is_admin: bool) -> "UserRole":
        return cls.ADMIN if is_admin else cls.USER
