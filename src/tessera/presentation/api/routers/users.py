"""User router for registration and user lookups.

The lookup routes serve other services and are public, like registration.
"""

import logging

from fastapi import APIRouter, status

from tessera.domain.user import User
from tessera.presentation.api.dependencies import (
    DBSession,
    MessageId,
    UserSvc,
)
from tessera.presentation.api.schemas.users import (
    CreateUserRequest,
    UserIdsRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _parse_user_id(raw: str) -> int | None:
    """Parse a path id; anything that is not an integer counts as missing."""
    try:
        return int(raw)
    except ValueError:
        return None


def _to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        is_admin=bool(user.is_admin),
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered successfully"},
        400: {"description": "A validation rule was broken"},
        409: {"description": "Email already registered"},
    },
)
async def create_user(
    request: CreateUserRequest,
    user_service: UserSvc,
    session: DBSession,
    message_id: MessageId,
) -> UserResponse:
    candidate = User.create(
        name=request.name,
        email=request.email,
        password=request.password,
        is_admin=request.is_admin,
    )
    user = await user_service.register(candidate, message_id=message_id)
    await session.commit()
    return _to_response(user)


@router.get(
    "/{user_id}",
    summary="Get a user by id",
    responses={
        200: {"description": "User found"},
        400: {"description": "User id missing or not a number"},
        404: {"description": "User not found"},
    },
)
async def get_user(
    user_id: str,
    user_service: UserSvc,
    message_id: MessageId,
) -> UserResponse:
    user = await user_service.get_user_by_id(
        _parse_user_id(user_id),
        message_id=message_id,
    )
    return _to_response(user)


@router.post(
    "/check-exists",
    summary="Check which user ids exist",
    responses={
        200: {"description": "Map of requested id to existence"},
    },
)
async def check_users_exist(
    request: UserIdsRequest,
    user_service: UserSvc,
    message_id: MessageId,
) -> dict[int, bool]:
    return await user_service.check_users_exist(request.ids, message_id=message_id)


@router.post(
    "/by-ids",
    summary="Fetch several users at once",
    responses={
        200: {"description": "Users that exist among the requested ids"},
    },
)
async def get_users_by_ids(
    request: UserIdsRequest,
    user_service: UserSvc,
    message_id: MessageId,
) -> list[UserResponse]:
    """Bulk lookup; ids that do not exist are silently left out."""
    users = await user_service.get_users_by_ids(request.ids, message_id=message_id)
    return [_to_response(user) for user in users]
