"""Product type catalogue endpoints."""

from fastapi import APIRouter, status

from src.nexus.api.dependencies import CurrentIdentity, ProductTypeServiceDep
from src.nexus.schemas.product_type import ProductTypeCreate, ProductTypeRead

router = APIRouter(prefix="/product-types", tags=["product-types"])


@router.get(
    "",
    response_model=list[ProductTypeRead],
    summary="List product types",
    description="All product types ordered by category. No authentication required.",
)
async def list_product_types(service: ProductTypeServiceDep) -> list[ProductTypeRead]:
    product_types = await service.list_product_types()
    return [ProductTypeRead.model_validate(pt) for pt in product_types]


@router.post(
    "",
    response_model=ProductTypeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create product type",
    responses={
        201: {"description": "Product type created"},
        400: {"description": "Invalid product type data"},
        403: {"description": "Administrator role required"},
        409: {"description": "Code already exists"},
    },
)
async def create_product_type(
    request: ProductTypeCreate,
    service: ProductTypeServiceDep,
    identity: CurrentIdentity,
) -> ProductTypeRead:
    product_type = await service.create_product_type(request, identity.user_id)
    return ProductTypeRead.model_validate(product_type)
