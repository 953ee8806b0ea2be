"""Async sessions for the registry database."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from src.nexus.core.db.engine import get_engine


def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Services commit and then return the loaded rows, so they must stay readable
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def get_session(engine: AsyncEngine | None = None) -> AsyncGenerator[AsyncSession]:
    """Open a session on the application engine, or on ``engine`` when given (tests)."""
    async with session_factory(engine or get_engine())() as session:
        yield session
