"""Integration test fixtures for database and HTTP client operations.

Uses an in-memory SQLite database (StaticPool, foreign keys on) so cascades and
check constraints behave as in production. Uses polyfactory for test data.
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlmodel import SQLModel

import src.nexus.models  # noqa: F401 - register tables on the metadata
from src.nexus.api.dependencies import get_db_session
from src.nexus.core.db import create_engine_for_url, dispose_engine, get_session
from src.nexus.core.health import reset_health_cache
from src.nexus.core.storage import get_storage_gateway
from src.nexus.main import create_app
from src.nexus.models import ProductType, Project
from tests.fakes import FakeStorageGateway
from tests.helpers import OWNER_ID, create_product_type, create_project


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database with all tables created."""
    test_engine = create_engine_for_url("sqlite+aiosqlite:///:memory:")
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    IMPORTANT: Tests must explicitly call `await session.commit()` to persist
    changes; the helpers in tests.helpers commit for you.
    """
    async with get_session(engine) as session:
        yield session


@pytest.fixture
async def app(engine: AsyncEngine, fake_storage: FakeStorageGateway) -> AsyncGenerator[FastAPI]:
    """Application wired to the test database and the in-memory storage gateway."""
    application = create_app()

    async def _get_test_session() -> AsyncGenerator[AsyncSession]:
        async with get_session(engine) as session:
            yield session

    application.dependency_overrides[get_db_session] = _get_test_session
    application.dependency_overrides[get_storage_gateway] = lambda: fake_storage
    reset_health_cache()
    yield application
    application.dependency_overrides.clear()
    reset_health_cache()
    await dispose_engine()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client; unhandled exceptions become 500 responses instead of raising."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def product_type(db_session: AsyncSession) -> ProductType:
    return await create_product_type(db_session)


@pytest.fixture
async def owned_project(db_session: AsyncSession) -> Project:
    """A private project owned by OWNER_ID."""
    return await create_project(db_session, OWNER_ID)
