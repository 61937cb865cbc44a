"""User schemas for request/response models."""

from pydantic import ConfigDict, Field

from tessera.presentation.api.schemas.base import CamelModel


class CreateUserRequest(CamelModel):
    """Request schema for user registration.

    Presence and length are checked by the domain validation rules, not
    here, so that violations are reported in a fixed order.
    """

    name: str | None = None
    email: str | None = None
    password: str | None = None
    is_admin: bool | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Ann",
                "email": "ann@example.com",
                "password": "p1",
                "isAdmin": False,
            },
        },
    )


class UserIdsRequest(CamelModel):
    """Request schema carrying a batch of user ids."""

    ids: list[int] | None = Field(default=None, description="User ids to look up")


class UserResponse(CamelModel):
    """Response schema for user data. The password hash is never exposed."""

    id: int
    name: str
    email: str
    is_admin: bool
