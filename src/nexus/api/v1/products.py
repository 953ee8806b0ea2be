"""Product endpoints - owner-scoped CRUD."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.nexus.api.dependencies import CurrentIdentity, ProductServiceDep
from src.nexus.schemas.attachment import MessageResponse
from src.nexus.schemas.product import ProductCreate, ProductDetail, ProductList, ProductUpdate

router = APIRouter(prefix="/products", tags=["products"])


@router.get(
    "",
    response_model=ProductList,
    summary="List my products",
    responses={
        200: {"description": "Products owned by the caller"},
        401: {"description": "Not authenticated"},
    },
)
async def list_products(
    service: ProductServiceDep,
    identity: CurrentIdentity,
    project_id: Annotated[UUID | None, Query(description="Only products of this project")] = None,
) -> ProductList:
    """List the caller's products, newest first."""
    products, total = await service.list_products(identity.user_id, project_id)
    return ProductList(products=[ProductDetail.model_validate(p) for p in products], total=total)


@router.post(
    "",
    response_model=ProductDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
    responses={
        201: {"description": "Product created"},
        400: {"description": "Invalid product data"},
        404: {"description": "Project not found or unauthorized, or unknown product type"},
    },
)
async def create_product(
    request: ProductCreate,
    service: ProductServiceDep,
    identity: CurrentIdentity,
) -> ProductDetail:
    product = await service.create_product(request, identity.user_id)
    return ProductDetail.model_validate(product)


@router.get(
    "/{product_id}",
    response_model=ProductDetail,
    summary="Get product",
    responses={
        200: {"description": "Product details"},
        404: {"description": "Product not found"},
    },
)
async def get_product(
    product_id: UUID,
    service: ProductServiceDep,
    identity: CurrentIdentity,
) -> ProductDetail:
    product = await service.get_product(product_id, identity.user_id)
    return ProductDetail.model_validate(product)


@router.put(
    "/{product_id}",
    response_model=ProductDetail,
    summary="Update product",
    description=(
        "Update the fields present in the body. Changing project_id moves the product "
        "to another project owned by the caller."
    ),
    responses={
        200: {"description": "Product updated"},
        400: {"description": "Invalid product data"},
        404: {"description": "Product, target project or product type not found"},
    },
)
async def update_product(
    product_id: UUID,
    request: ProductUpdate,
    service: ProductServiceDep,
    identity: CurrentIdentity,
) -> ProductDetail:
    product = await service.update_product(product_id, request, identity.user_id)
    return ProductDetail.model_validate(product)


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    summary="Delete product",
    responses={
        200: {"description": "Product deleted"},
        404: {"description": "Product not found"},
    },
)
async def delete_product(
    product_id: UUID,
    service: ProductServiceDep,
    identity: CurrentIdentity,
) -> MessageResponse:
    await service.delete_product(product_id, identity.user_id)
    return MessageResponse(message="Product deleted")
