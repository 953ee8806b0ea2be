"""Base repository with common CRUD operations."""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    should be done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID | str) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def delete(self, entity: ModelType) -> None:
        """Mark entity for deletion (no commit)."""
        await self.session.delete(entity)

    async def count(self, query: Any) -> int:
        """Count the rows a query would return, ignoring ordering and pagination.

        Args:
            query: The filtered SQLAlchemy select (without limit/offset)
        """
        count_query = select(func.count()).select_from(query.order_by(None).subquery())
        result = await self.session.execute(count_query)
        return int(result.scalar_one())


class OwnedRepository(BaseRepository[ModelType]):
    """Repository for entities carrying an ``owner_id`` column.

    Ownership is part of the WHERE clause, so a row owned by someone else is
    indistinguishable from a missing one.
    """

    async def get_owned(
        self,
        id: UUID,
        owner_id: str,
        options: tuple[Any, ...] = (),
    ) -> ModelType | None:
        """Get a record by primary key only if it belongs to ``owner_id``."""
        query = select(self.model).where(
            self.model.id == id,  # type: ignore[attr-defined]
            self.model.owner_id == owner_id,  # type: ignore[attr-defined]
        )
        if options:
            # Refresh relationships even when the row is already in the identity map
            query = query.options(*options).execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()
