"""Commit helper shared by the services.

Services own the transaction. A failed commit is rolled back and surfaces as
``UpstreamFailure``; the SQLAlchemy error is kept as the cause for the logs.
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.nexus.core.exceptions import UpstreamFailure
from src.nexus.core.logging import get_logger

logger = get_logger(__name__)


async def commit_or_fail(session: AsyncSession, operation: str) -> None:
    """Commit the session, translating persistence errors.

    Args:
        session: Request-scoped session holding the pending changes
        operation: Short description used in the log event, e.g. "create project"
    """
    try:
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error("Persistence failure", operation=operation, error=str(e))
        raise UpstreamFailure(f"Could not {operation}") from e
