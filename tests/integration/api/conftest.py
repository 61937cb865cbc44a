"""Pytest fixtures for API tests against an in-memory SQLite database."""

import httpx
import pytest
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tessera.infrastructure.persistence.sqlalchemy.models import Base
from tessera.presentation.api.app import API_V1_PREFIX, create_app
from tessera.presentation.api.dependencies import get_db_session
from tessera_config.settings import Settings

TEST_JWT_SECRET = "test-jwt-secret-for-testing-only-0123456789"


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled."""
    return Settings(
        # Required security settings
        jwt_secret_key=SecretStr(TEST_JWT_SECRET),
        postgres_password=SecretStr("test-password"),
        # API settings
        api_host="127.0.0.1",
        api_port=8000,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        password_hash_rounds=4,  # Low rounds for fast tests
    )


@pytest.fixture
async def test_db_engine():
    """Create an in-memory SQLite database for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,  # One shared connection keeps the memory DB alive
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def client(api_settings, test_db_engine):
    """Create an HTTP client bound to the app with an in-memory database."""
    app = create_app(settings=api_settings)

    # Create a session maker that uses our test engine
    test_session_maker = async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Override the database session dependency
    async def override_get_db_session():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session

    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def ann_data() -> dict:
    """Registration payload for a regular user."""
    return {
        "name": "Ann",
        "email": "ann@example.com",
        "password": "p1",
        "isAdmin": False,
    }


@pytest.fixture
def admin_data() -> dict:
    """Registration payload for an admin."""
    return {
        "name": "Root",
        "email": "root@example.com",
        "password": "admin-pass",
        "isAdmin": True,
    }


async def register_and_login(client, api_v1_prefix: str, data: dict) -> tuple[int, dict]:
    """Register a user, log in, and return its id with bearer headers."""
    response = await client.post(f"{api_v1_prefix}/users", json=data)
    assert response.status_code == 201, response.text
    user_id = response.json()["id"]

    response = await client.post(
        f"{api_v1_prefix}/auth/login",
        json={"email": data["email"], "password": data["password"]},
    )
    assert response.status_code == 200, response.text
    return user_id, {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
async def user_auth(client, api_v1_prefix, ann_data) -> tuple[int, dict]:
    """Id and auth headers of a registered regular user."""
    return await register_and_login(client, api_v1_prefix, ann_data)


@pytest.fixture
async def admin_auth(client, api_v1_prefix, admin_data) -> tuple[int, dict]:
    """Id and auth headers of a registered admin."""
    return await register_and_login(client, api_v1_prefix, admin_data)
