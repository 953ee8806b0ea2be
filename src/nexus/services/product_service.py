"""Product service - owner-scoped product CRUD."""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.nexus.core.exceptions import NotFound, UpstreamFailure
from src.nexus.core.logging import get_logger
from src.nexus.models import Product
from src.nexus.models.base import touch
from src.nexus.repositories import ProductRepository, ProductTypeRepository
from src.nexus.schemas.product import ProductCreate, ProductUpdate
from src.nexus.services.authorization import AuthorizationGuard
from src.nexus.services.persistence import commit_or_fail

logger = get_logger(__name__)

PROJECT_NOT_FOUND_OR_UNAUTHORIZED = "Project not found or unauthorized"


class ProductService:
    """Product operations.

    A product always lives in a project owned by the same user; that is checked
    on creation and whenever ``project_id`` changes.
    """

    def __init__(
        self,
        product_repo: ProductRepository,
        product_type_repo: ProductTypeRepository,
        guard: AuthorizationGuard,
        session: AsyncSession,
    ):
        self.product_repo = product_repo
        self.product_type_repo = product_type_repo
        self.guard = guard
        self.session = session

    async def create_product(self, data: ProductCreate, owner_id: str) -> Product:
        """Create a product under one of the caller's projects.

        Raises:
            NotFound: If the project is missing or not owned, or the product type is unknown
        """
        await self.guard.require_project(
            data.project_id, owner_id, message=PROJECT_NOT_FOUND_OR_UNAUTHORIZED
        )
        await self._require_product_type(data.product_type_id)

        values = data.model_dump()
        values["product_url"] = str(data.product_url) if data.product_url else None
        product = Product(**values, owner_id=owner_id)
        self.product_repo.add(product)
        await commit_or_fail(self.session, "create product")
        logger.info(
            "Product created",
            product_id=str(product.id),
            project_id=str(data.project_id),
            owner_id=owner_id,
        )
        return await self._reload(product.id, owner_id)

    async def get_product(self, product_id: UUID, owner_id: str) -> Product:
        return await self.guard.require_product(product_id, owner_id, with_details=True)

    async def list_products(
        self, owner_id: str, project_id: UUID | None = None
    ) -> tuple[list[Product], int]:
        """List owned products, newest first, optionally for a single project.

        Returns:
            Tuple of (products, total)
        """
        products = await self.product_repo.list_owned(owner_id, project_id)
        return products, len(products)

    async def update_product(self, product_id: UUID, data: ProductUpdate, owner_id: str) -> Product:
        """Apply the fields present in ``data`` to an owned product.

        Raises:
            NotFound: If the product is not owned, the new product type does not
                exist, or the new project is not owned by the caller
        """
        product = await self.guard.require_product(product_id, owner_id)
        changes: dict[str, Any] = data.model_dump(exclude_unset=True)

        if "product_type_id" in changes and changes["product_type_id"] != product.product_type_id:
            await self._require_product_type(changes["product_type_id"])
        if "project_id" in changes and changes["project_id"] != product.project_id:
            await self.guard.require_project(
                changes["project_id"], owner_id, message=PROJECT_NOT_FOUND_OR_UNAUTHORIZED
            )
        if "product_url" in changes and changes["product_url"] is not None:
            changes["product_url"] = str(changes["product_url"])

        for field, value in changes.items():
            setattr(product, field, value)
        touch(product)

        await commit_or_fail(self.session, "update product")
        logger.info("Product updated", product_id=str(product_id), fields=sorted(changes))
        return await self._reload(product_id, owner_id)

    async def delete_product(self, product_id: UUID, owner_id: str) -> None:
        product = await self.guard.require_product(product_id, owner_id)
        await self.product_repo.delete(product)
        await commit_or_fail(self.session, "delete product")
        logger.info("Product deleted", product_id=str(product_id), owner_id=owner_id)

    async def _require_product_type(self, product_type_id: UUID) -> None:
        if not await self.product_type_repo.exists(product_type_id):
            raise NotFound("Product type not found")

    async def _reload(self, product_id: UUID, owner_id: str) -> Product:
        product = await self.product_repo.get_owned_with_details(product_id, owner_id)
        if product is None:
            raise UpstreamFailure("Product vanished after write")
        return product
