"""Global pytest fixtures for Callboard.

This module provides shared fixtures for testing including:
- An in-memory SQLite database with the full schema
- A dict-backed Redis mock for the session store
- The concept graph bound to one session
- An HTTP client wired to the app with both overridden
"""

import random
from collections.abc import AsyncGenerator
from datetime import datetime, timezone
from typing import Any
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from callboard.concepts import Concepts
from callboard.config import FolderSettings
from callboard.database import build_engine, create_schema, get_db
from callboard.redis import SessionStore, get_session_store
from callboard.services.account_service import create_account
from tests.factories.account_factory import AccountFactory


def utcnow() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


# ===========================================
# DATABASE FIXTURES
# ===========================================


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test."""
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def folder_settings() -> FolderSettings:
    return FolderSettings()


@pytest.fixture
def concepts(db_session: AsyncSession, folder_settings: FolderSettings) -> Concepts:
    """Every concept bound to the test session, with a seeded RNG for challenges."""
    return Concepts(db_session, folder_settings=folder_settings, rng=random.Random(7))


@pytest.fixture
def make_user(concepts: Concepts):
    """Create a full account (counter, restrictions, folders) and return its id."""

    async def _make(**kwargs: Any) -> UUID:
        user = await create_account(concepts, AccountFactory.request(**kwargs))
        return user["id"]

    return _make


# ===========================================
# REDIS MOCK FIXTURES
# ===========================================


@pytest.fixture
def mock_redis_client() -> MagicMock:
    """Redis mock backed by a dict so session state survives between calls."""
    store: dict[str, str] = {}

    async def _set(key, value, ex=None):
        store[key] = value
        return True

    async def _get(key):
        return store.get(key)

    async def _delete(*keys):
        return sum(1 for key in keys if store.pop(key, None) is not None)

    redis = MagicMock()
    redis.store = store
    redis.set = AsyncMock(side_effect=_set)
    redis.get = AsyncMock(side_effect=_get)
    redis.delete = AsyncMock(side_effect=_delete)
    return redis


@pytest.fixture
def session_store(mock_redis_client: MagicMock) -> SessionStore:
    return SessionStore(mock_redis_client)


# ===========================================
# HTTP CLIENT FIXTURES
# ===========================================


@pytest_asyncio.fixture
async def async_client(
    session_factory, session_store: SessionStore
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for API testing."""
    from callboard.main import app

    async def _get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_session_store] = lambda: session_store
    app.state.session_factory = session_factory
    app.state.folder_settings = FolderSettings()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def signup(async_client: AsyncClient):
    """Sign up and log in through the API; returns (user id, auth headers)."""

    async def _signup(**kwargs: Any) -> tuple[str, dict[str, str]]:
        payload = AccountFactory.payload(**kwargs)
        response = await async_client.post("/api/users", json=payload)
        assert response.status_code == 201, response.text
        login = await async_client.post(
            "/api/login",
            json={"email": payload["email"], "password": payload["password"]},
        )
        assert login.status_code == 200, login.text
        body = login.json()
        return body["user"]["id"], {"Authorization": f"Bearer {body['access_token']}"}

    return _signup
