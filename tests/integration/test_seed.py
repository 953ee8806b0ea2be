"""Seeding the product type catalogue."""

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from src.nexus.models import ProductType
from src.nexus.repositories import ProductTypeRepository
from src.nexus.seed import PRODUCT_TYPE_CATALOGUE
from src.nexus.services import ProductTypeService
from tests.helpers import count_rows, create_product_type

pytestmark = pytest.mark.integration


def make_service(session: AsyncSession) -> ProductTypeService:
    return ProductTypeService(ProductTypeRepository(session), session, admin_user_ids=[])


async def test_seed_is_idempotent(db_session: AsyncSession, engine: AsyncEngine) -> None:
    service = make_service(db_session)

    assert await service.seed(PRODUCT_TYPE_CATALOGUE) == len(PRODUCT_TYPE_CATALOGUE)
    assert await service.seed(PRODUCT_TYPE_CATALOGUE) == 0
    assert await count_rows(engine, ProductType) == len(PRODUCT_TYPE_CATALOGUE)


async def test_seed_skips_existing_codes(db_session: AsyncSession, engine: AsyncEngine) -> None:
    await create_product_type(db_session, code="PATENTE", description="Custom description")

    created = await make_service(db_session).seed(PRODUCT_TYPE_CATALOGUE)

    assert created == len(PRODUCT_TYPE_CATALOGUE) - 1
    assert await count_rows(engine, ProductType, ProductType.code == "PATENTE") == 1
    assert (
        await count_rows(engine, ProductType, ProductType.description == "Custom description")
        == 1
    )
