"""
Pytest configuration and fixtures.
Provides an in-memory database, an HTTP client bound to it, and seeded principals.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

import geomonitor.models  # noqa: F401  registers all tables
from geomonitor.db import session as db_session
from geomonitor.db.base import Base
from geomonitor.db.session import get_db
from geomonitor.main import app, limiter
from geomonitor.models import Branch, User

from factories import auth_headers, create_branch, create_user


# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def test_session_maker():
    """
    Create an in-memory database and a sessionmaker bound to it.
    """
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture(scope="function")
async def test_db_session(test_session_maker):
    """
    Create a test database session.
    """
    async with test_session_maker() as session:
        yield session


@pytest.fixture(scope="function")
async def test_client(test_session_maker, monkeypatch):
    """
    Create a test HTTP client whose requests use the test database.
    """
    async def override_get_db():
        async with test_session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    monkeypatch.setattr(db_session, "async_session_maker", test_session_maker)
    monkeypatch.setattr(limiter, "enabled", False)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def admin_user(test_session_maker) -> User:
    """User with every permission and no account (unrestricted branch scope)."""
    return await create_user(test_session_maker, "admin", role="admin")


@pytest.fixture(scope="function")
async def admin_headers(admin_user) -> dict:
    return auth_headers(admin_user)


@pytest.fixture(scope="function")
async def branch(test_session_maker) -> Branch:
    return await create_branch(test_session_maker, "Haramaya Branch")
