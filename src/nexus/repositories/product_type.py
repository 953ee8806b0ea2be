"""Repository for ProductType entity."""

from uuid import UUID

from sqlmodel import select

from src.nexus.models import ProductType
from src.nexus.repositories.base import BaseRepository


class ProductTypeRepository(BaseRepository[ProductType]):
    """Repository for the product type catalogue."""

    model = ProductType

    async def list_all(self) -> list[ProductType]:
        """List all product types grouped by category."""
        result = await self.session.execute(
            select(ProductType).order_by(ProductType.category, ProductType.code)
        )
        return list(result.scalars().all())

    async def get_by_code(self, code: str) -> ProductType | None:
        """Get product type by its unique code."""
        result = await self.session.execute(select(ProductType).where(ProductType.code == code))
        return result.scalar_one_or_none()

    async def exists(self, id: UUID) -> bool:
        """Check if a product type with the given ID exists."""
        return await self.get_by_id(id) is not None

    async def list_codes(self) -> set[str]:
        result = await self.session.execute(select(ProductType.code))
        return set(result.scalars().all())
