"""Request-scoped database session."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.nexus.core.db import get_session


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """One session per request; repositories and services share it. Tests override this."""
    async with get_session() as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]
