"""Shared fixtures for the TaskBase test suite."""

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskbase.core.config import Settings
from taskbase.infrastructure.api.app import create_app
from taskbase.infrastructure.auth import JWTService
from taskbase.infrastructure.persistence.database import DatabaseManager

TEST_SECRET_KEY = "test-secret-key-for-unit-tests-only-0123456789"
DEFAULT_PASSWORD = "Password123"


@pytest.fixture
def test_settings() -> Settings:
    """Settings for an isolated in-memory database."""
    return Settings(
        environment="testing",
        database_url="sqlite+aiosqlite:///:memory:",
        secret_key=TEST_SECRET_KEY,
        cookie_secure=False,
        log_format="console",
    )


@pytest.fixture
def token_service() -> JWTService:
    return JWTService(secret_key=TEST_SECRET_KEY, expires_delta=timedelta(days=10))


@pytest_asyncio.fixture
async def db_manager(test_settings: Settings) -> AsyncGenerator[DatabaseManager, None]:
    """Database manager with all tables created."""
    db = DatabaseManager(test_settings)
    await db.create_tables()
    yield db
    await db.drop_tables()
    await db.disconnect()


@pytest_asyncio.fixture
async def db_session(db_manager: DatabaseManager) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with db_manager.session() as session:
        yield session


@pytest.fixture
def row_count(db_manager: DatabaseManager) -> Callable[..., Awaitable[int]]:
    """Count the rows of a model, optionally filtered, in a fresh session."""

    async def _count(model, *criteria) -> int:
        query = select(func.count()).select_from(model)
        if criteria:
            query = query.where(*criteria)
        async with db_manager.session() as session:
            return (await session.execute(query)).scalar_one()

    return _count


@pytest.fixture
def app(test_settings: Settings, db_manager: DatabaseManager):
    """Application wired to the test database.

    The ASGI transport does not run the lifespan, so the tables are created
    by the ``db_manager`` fixture instead.
    """
    application = create_app(test_settings)
    application.state.db = db_manager
    return application


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def register_user(
    client: AsyncClient,
) -> Callable[..., Awaitable[dict]]:
    """Register a user through the API and return the response body."""

    async def _register(
        email: str = "alice@example.com",
        password: str = DEFAULT_PASSWORD,
        name: str = "Alice",
    ) -> dict:
        response = await client.post(
            "/api/v1/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def auth_headers() -> Callable[[str], dict[str, str]]:
    """Build an Authorization header for a token."""

    def _headers(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    return _headers
