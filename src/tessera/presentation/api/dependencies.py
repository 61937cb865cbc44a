"""FastAPI dependency injection for the Tessera API.

Provides dependencies for:
- Database sessions
- Authentication (principal resolved by the middleware)
- Correlation ids
- Service instances
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from tessera.application.context import Principal
from tessera.application.services import AuthenticationService, UserService
from tessera.domain.shared import AuthenticationError, ErrorCode
from tessera.infrastructure.persistence.sqlalchemy.models import Base
from tessera.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)
from tessera_auth import JWTService, PasswordHashingService
from tessera_config.settings import get_settings

logger = logging.getLogger(__name__)


@lru_cache()
def get_database_url() -> str:
    """
    Get database URL from application settings.

    Returns
    -------
    Database URL string
    """
    url = get_settings().database_url

    # Ensure data directory exists for file-based SQLite
    if url.startswith("sqlite") and ":memory:" not in url:
        db_path = url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return url


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    The engine manages the connection pool and is reused across all requests.

    Returns
    -------
    AsyncEngine instance
    """
    return create_async_engine(
        get_database_url(),
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """
    Get the shared async session maker (singleton).

    Returns
    -------
    async_sessionmaker configured with the shared engine
    """
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.
    Anything not committed by the router is rolled back on close.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Database Schema Management
# -----------------------------------------------------------------------------


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    engine = engine or get_engine()
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema is up to date (missing tables created if needed)")


# -----------------------------------------------------------------------------
# Request Context
# -----------------------------------------------------------------------------


def get_message_id(request: Request) -> str:
    """Correlation id assigned by ``MessageIdMiddleware``."""
    return getattr(request.state, "message_id", "")


MessageId = Annotated[str, Depends(get_message_id)]


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------


def get_jwt_service(request: Request) -> JWTService:
    """Get the JWT service built once at application startup.

    The authentication middleware verifies tokens with this same instance.
    """
    return request.app.state.jwt_service


def get_password_service(request: Request) -> PasswordHashingService:
    """Get password hashing service."""
    return request.app.state.password_service


async def get_user_service(
    session: DBSession,
    password_service: PasswordHashingService = Depends(get_password_service),
) -> UserService:
    """Get user service for registration and user lookups."""
    return UserService(
        user_repository=UserRepositorySQLAlchemy(session),
        password_service=password_service,
    )


async def get_authentication_service(
    session: DBSession,
    jwt_service: JWTService = Depends(get_jwt_service),
    password_service: PasswordHashingService = Depends(get_password_service),
) -> AuthenticationService:
    """
    Get authentication service with all dependencies.

    This service orchestrates credential checking and token minting.
    """
    return AuthenticationService(
        user_repository=UserRepositorySQLAlchemy(session),
        password_service=password_service,
        jwt_service=jwt_service,
    )


# Type aliases for injected services
UserSvc = Annotated[UserService, Depends(get_user_service)]
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


# -----------------------------------------------------------------------------
# Current Principal (resolved by the authentication middleware)
# -----------------------------------------------------------------------------


async def require_principal(request: Request) -> Principal:
    """
    FastAPI dependency returning the authenticated caller.

    The middleware leaves requests without a usable token anonymous; this
    is where an anonymous request to a protected route gets rejected.

    Raises
    ------
    AuthenticationError
        ``TOKEN_MISSING`` if no principal was attached to the request
    """
    user = request.scope.get("user")
    if not isinstance(user, Principal):
        raise AuthenticationError(ErrorCode.TOKEN_MISSING)
    return user


# Type alias for injected principal
CurrentPrincipal = Annotated[Principal, Depends(require_principal)]
