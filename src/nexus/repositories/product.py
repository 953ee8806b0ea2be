"""Repository for Product entity."""

from typing import Any
from uuid import UUID

from sqlalchemy.orm import selectinload
from sqlmodel import select

from src.nexus.models import Product
from src.nexus.repositories.base import OwnedRepository


def detail_options() -> tuple[Any, ...]:
    """Eager loads for the owner view of a product."""
    return (
        selectinload(Product.project),
        selectinload(Product.product_type),
        selectinload(Product.attachments),
    )


class ProductRepository(OwnedRepository[Product]):
    """Repository for Product entity."""

    model = Product

    async def get_owned_with_details(self, id: UUID, owner_id: str) -> Product | None:
        """Get an owned product with project, type and attachments loaded."""
        return await self.get_owned(id, owner_id, options=detail_options())

    async def list_owned(self, owner_id: str, project_id: UUID | None = None) -> list[Product]:
        """List a user's products, newest first, optionally for one project."""
        query = select(Product).where(Product.owner_id == owner_id)
        if project_id is not None:
            query = query.where(Product.project_id == project_id)
        query = (
            query.options(*detail_options())
            .order_by(Product.created_at.desc(), Product.id)  # type: ignore[attr-defined]
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
