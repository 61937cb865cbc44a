"""Authentication schemas for request/response models."""

from pydantic import ConfigDict, Field

from tessera.presentation.api.schemas.base import CamelModel


class LoginRequest(CamelModel):
    """Request schema for user login.

    Both fields are optional at the schema level so that a missing value
    is reported with the same code as a blank one.
    """

    email: str | None = None
    password: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "securepassword123",
            },
        },
    )


class LoginResponse(CamelModel):
    """Response schema for a successful login."""

    token: str = Field(..., description="Signed access token (HS256)")
    user_id: int
    email: str
    is_admin: bool

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.eyJzdWIiOiI0MiJ9.xxx",
                "userId": 42,
                "email": "user@example.com",
                "isAdmin": False,
            },
        },
    )


class PrincipalResponse(CamelModel):
    """Response schema describing the authenticated caller."""

    user_id: int
    email: str
    is_admin: bool
    role: str
