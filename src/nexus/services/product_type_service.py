"""Product type catalogue service."""

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.nexus.core.exceptions import Conflict, Forbidden, UpstreamFailure
from src.nexus.core.logging import get_logger
from src.nexus.models import ProductType
from src.nexus.repositories import ProductTypeRepository
from src.nexus.schemas.product_type import ProductTypeCreate
from src.nexus.services.persistence import commit_or_fail

logger = get_logger(__name__)


class ProductTypeService:
    """Read-mostly reference data. Writes are limited to configured administrators."""

    def __init__(
        self,
        product_type_repo: ProductTypeRepository,
        session: AsyncSession,
        admin_user_ids: list[str],
    ):
        self.product_type_repo = product_type_repo
        self.session = session
        self.admin_user_ids = set(admin_user_ids)

    async def list_product_types(self) -> list[ProductType]:
        return await self.product_type_repo.list_all()

    async def create_product_type(self, data: ProductTypeCreate, caller_id: str) -> ProductType:
        """Create a product type.

        Raises:
            Forbidden: If the caller is not an administrator
            Conflict: If the code is already taken
        """
        if caller_id not in self.admin_user_ids:
            raise Forbidden()

        if await self.product_type_repo.get_by_code(data.code) is not None:
            raise Conflict(f"Product type with code '{data.code}' already exists")

        product_type = ProductType(**data.model_dump())
        self.product_type_repo.add(product_type)
        try:
            await self.session.commit()
        except IntegrityError as e:
            # Fallback in case of race condition
            await self.session.rollback()
            raise Conflict(f"Product type with code '{data.code}' already exists") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise UpstreamFailure("Could not create product type") from e
        await self.session.refresh(product_type)
        logger.info("Product type created", code=product_type.code, caller_id=caller_id)
        return product_type

    async def seed(self, catalogue: list[ProductTypeCreate]) -> int:
        """Insert the catalogue entries whose code is not present yet.

        Returns:
            Number of product types inserted
        """
        existing = await self.product_type_repo.list_codes()
        created = 0
        for entry in catalogue:
            if entry.code in existing:
                continue
            self.product_type_repo.add(ProductType(**entry.model_dump()))
            existing.add(entry.code)
            created += 1
        await commit_or_fail(self.session, "seed product types")
        return created
