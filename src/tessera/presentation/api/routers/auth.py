"""Authentication router for login and caller introspection."""

import logging

from fastapi import APIRouter

from tessera.presentation.api.dependencies import (
    AuthService,
    CurrentPrincipal,
    MessageId,
)
from tessera.presentation.api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    PrincipalResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/login",
    summary="Authenticate user",
    responses={
        200: {"description": "Login successful"},
        400: {"description": "Email or password missing"},
        401: {"description": "Invalid credentials"},
    },
)
async def login(
    request: LoginRequest,
    auth_service: AuthService,
    message_id: MessageId,
) -> LoginResponse:
    """
    Authenticate with email and password.

    Returns a signed access token together with the claims it carries.
    An unknown email and a wrong password are indistinguishable.
    """
    result = await auth_service.login(
        email=request.email,
        password=request.password,
        message_id=message_id,
    )
    return LoginResponse(
        token=result.token,
        user_id=result.user_id,
        email=result.email,
        is_admin=result.is_admin,
    )


@router.get(
    "/me",
    summary="Describe the authenticated caller",
    responses={
        200: {"description": "Token accepted"},
        401: {"description": "Token missing, invalid or expired"},
    },
)
async def me(principal: CurrentPrincipal) -> PrincipalResponse:
    """Return the identity carried by the bearer token."""
    return PrincipalResponse(
        user_id=principal.user_id,
        email=principal.email,
        is_admin=principal.is_admin,
        role=principal.role.value,
    )
