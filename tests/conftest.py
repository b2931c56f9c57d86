"""Pytest configuration and shared fixtures.

Fixtures are organized by category:
    - Clock Fixtures: controllable wall and monotonic clocks
    - Database Fixtures: in-memory SQLite engine, session and user factory
    - Service Fixtures: cache, token, auth and post services
    - Application Fixtures: FastAPI app wired to the fixtures above, HTTP client
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine
    from typing import Any

    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

    from postboard.features.users.models import User

# Tests never touch conf/ files, Redis or a log file
os.environ.setdefault("CONFIG_DIR", "tests/.no-conf")
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AUTH_SECRET_KEY", "test-secret-key")
os.environ.setdefault("CACHE_BACKEND", "memory")
os.environ.setdefault("LOG_FILE_ENABLED", "false")

# Register every mapped class before any model is instantiated
import postboard.features.posts.models  # noqa: E402, F401
import postboard.features.users.models  # noqa: E402, F401

TEST_SECRET = "test-secret-key"
DEFAULT_PASSWORD = "secret123"


# ============================================================================
# Clock Fixtures
# ============================================================================


class FakeClock:
    """Wall clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class FakeMonotonic:
    """Monotonic seconds counter that only moves when told to."""

    def __init__(self) -> None:
        self.value = 1000.0

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Wall clock starting at 2025-01-01 00:00 UTC."""
    return FakeClock(datetime(2025, 1, 1, tzinfo=UTC))


@pytest.fixture
def monotonic() -> FakeMonotonic:
    """Monotonic clock for cache expiry."""
    return FakeMonotonic()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Create async SQLAlchemy engine with in-memory SQLite and all tables.

    StaticPool keeps a single connection so every session (including those
    opened by the app under test) sees the same in-memory database.
    """
    from postboard.core.database import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(db_engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Database session for one test."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_user(
    db_session: AsyncSession,
) -> Callable[..., Coroutine[Any, Any, User]]:
    """Factory persisting users directly, bypassing registration rules.

    Example:
        async def test_something(make_user):
            admin = await make_user("root", role=Role.ADMIN)
    """
    from postboard.features.users.models import Role, User
    from postboard.features.users.passwords import hash_password

    async def _make_user(
        username: str,
        *,
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
        role: Role = Role.USER,
    ) -> User:
        user = User(
            username=username,
            email=email or f"{username}@example.com",
            password_hash=hash_password(password),
            role=role,
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _make_user


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def memory_cache(monotonic: FakeMonotonic):
    """In-process post cache driven by the fake monotonic clock."""
    from postboard.infra.cache import MemoryCache

    return MemoryCache(clock=monotonic)


@pytest.fixture
def token_service(clock: FakeClock):
    """Token service signing with the test secret and the fake clock."""
    from postboard.features.users.tokens import TokenService

    return TokenService(TEST_SECRET, clock=clock)


@pytest.fixture
def auth_service(db_session: AsyncSession, token_service):
    from postboard.features.users.service import AuthService

    return AuthService(db_session, token_service)


@pytest.fixture
def post_service(db_session: AsyncSession, memory_cache, clock: FakeClock):
    from postboard.features.posts.service import PostService

    return PostService(db_session, memory_cache, clock=clock)


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
async def app(session_factory: async_sessionmaker[AsyncSession], memory_cache, token_service):
    """FastAPI application wired to the test database, cache and token service.

    ASGITransport does not run the lifespan, so nothing here touches the
    configured database or Redis.
    """
    from postboard.app.main import create_app
    from postboard.core.dependencies import get_cache, get_db_session, get_token_service

    async def _get_test_session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            yield session

    application = create_app()
    application.dependency_overrides[get_db_session] = _get_test_session
    application.dependency_overrides[get_cache] = lambda: memory_cache
    application.dependency_overrides[get_token_service] = lambda: token_service
    return application


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for the test application.

    Example:
        async def test_health_check(client):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
