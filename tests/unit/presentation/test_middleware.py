"""Unit tests for the authentication backend and path allow-list."""

from datetime import timedelta

import pytest
from starlette.requests import HTTPConnection, Request

from tessera.application.context import Principal
from tessera.domain.shared import AuthenticationError, ErrorCode
from tessera.presentation.api.dependencies import require_principal
from tessera.presentation.api.middleware import (
    JWTAuthenticationBackend,
    is_public_path,
)
from tessera_auth import JWTService

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"
PUBLIC_PATHS = ["/api/v1/auth/login", "/api/v1/users", "/health", "/docs*"]


def _scope(path: str, authorization: str | None = None) -> dict:
    headers = []
    if authorization is not None:
        headers.append((b"authorization", authorization.encode()))
    return {
        "type": "http",
        "method": "GET",
        "scheme": "http",
        "server": ("testserver", 80),
        "path": path,
        "root_path": "",
        "query_string": b"",
        "headers": headers,
    }


class TestIsPublicPath:
    """Tests for exact and prefix matching."""

    @pytest.mark.parametrize(
        "path",
        ["/api/v1/auth/login", "/api/v1/users", "/health", "/docs", "/docs/oauth2"],
    )
    def test_public_paths(self, path):
        """Test that listed paths and prefix matches are public."""
        assert is_public_path(path, PUBLIC_PATHS) is True

    @pytest.mark.parametrize(
        "path",
        ["/api/v1/users/1", "/api/v1/users/by-ids", "/api/v1/auth/me", "/healthz"],
    )
    def test_protected_paths(self, path):
        """Test that exact entries do not match longer paths."""
        assert is_public_path(path, PUBLIC_PATHS) is False


class TestJWTAuthenticationBackend:
    """Tests for resolving the principal from the Authorization header."""

    def setup_method(self):
        """Set up test fixtures."""
        self.jwt_service = JWTService(secret_key=TEST_SECRET)
        self.backend = JWTAuthenticationBackend(self.jwt_service, PUBLIC_PATHS)

    async def _authenticate(self, path: str, authorization: str | None = None):
        return await self.backend.authenticate(
            HTTPConnection(_scope(path, authorization)),
        )

    @pytest.mark.asyncio
    async def test_public_path_with_garbage_token_passes_anonymously(self):
        """Test that public paths skip token inspection entirely."""
        result = await self._authenticate("/api/v1/auth/login", "Bearer garbage")

        assert result is None

    @pytest.mark.asyncio
    async def test_protected_path_with_garbage_token_continues_anonymously(self):
        """Test that a bad token never produces an error here."""
        result = await self._authenticate("/api/v1/users/1", "Bearer garbage")

        assert result is None

    @pytest.mark.asyncio
    async def test_missing_header_is_anonymous(self):
        """Test that a request without Authorization is anonymous."""
        assert await self._authenticate("/api/v1/users/1") is None

    @pytest.mark.asyncio
    async def test_non_bearer_scheme_is_anonymous(self):
        """Test that other schemes are ignored."""
        token = self.jwt_service.create_access_token(1, "a@example.com", False)

        assert await self._authenticate("/api/v1/users/1", f"Basic {token}") is None

    @pytest.mark.asyncio
    async def test_expired_token_is_anonymous(self):
        """Test that an expired token leaves the request anonymous."""
        token = self.jwt_service.create_access_token(
            1,
            "a@example.com",
            False,
            expires_delta=timedelta(seconds=-1),
        )

        assert await self._authenticate("/api/v1/users/1", f"Bearer {token}") is None

    @pytest.mark.asyncio
    async def test_valid_admin_token_yields_admin_principal(self):
        """Test that a valid admin token resolves to role admin."""
        token = self.jwt_service.create_access_token(7, "root@example.com", True)

        credentials, principal = await self._authenticate(
            "/api/v1/users/by-ids",
            f"Bearer {token}",
        )

        assert principal == Principal(user_id=7, email="root@example.com", is_admin=True)
        assert principal.role.value == "admin"
        assert credentials.scopes == ["authenticated", "admin"]

    @pytest.mark.asyncio
    async def test_valid_user_token_yields_user_scope(self):
        """Test that a non-admin token resolves to role user."""
        token = self.jwt_service.create_access_token(8, "ann@example.com", False)

        credentials, principal = await self._authenticate(
            "/api/v1/users/8",
            f"Bearer {token}",
        )

        assert principal.is_authenticated is True
        assert principal.display_name == "ann@example.com"
        assert credentials.scopes == ["authenticated", "user"]


class TestAuthorizationDependencies:
    """Tests for require_principal."""

    @pytest.mark.asyncio
    async def test_require_principal_rejects_anonymous(self):
        """Test that an anonymous request is TOKEN_MISSING."""
        request = Request(_scope("/api/v1/auth/me"))

        with pytest.raises(AuthenticationError) as exc_info:
            await require_principal(request)

        assert exc_info.value.code is ErrorCode.TOKEN_MISSING

    @pytest.mark.asyncio
    async def test_require_principal_returns_attached_principal(self):
        """Test that the middleware's principal is handed to the route."""
        principal = Principal(user_id=1, email="a@example.com", is_admin=False)
        request = Request({**_scope("/api/v1/auth/me"), "user": principal})

        assert await require_principal(request) is principal
