"""Product schemas for API request/response."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, HttpUrl, field_validator

from src.nexus.schemas.attachment import AttachmentRead
from src.nexus.schemas.product_type import ProductTypeRead


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


class ProductCreate(BaseModel):
    """Schema for creating a product."""

    title: str = Field(min_length=1, max_length=200)
    summary: str = Field(min_length=1, max_length=5000)
    description: str | None = Field(default=None, max_length=10000)
    product_url: HttpUrl | None = None
    product_type_id: UUID
    project_id: UUID
    is_public: bool = False

    @field_validator("title", "summary")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be empty or whitespace only")
        return v

    @field_validator("description", "product_url", mode="before")
    @classmethod
    def validate_optional_text(cls, v: Any) -> Any:
        return _blank_to_none(v)


class ProductUpdate(BaseModel):
    """Schema for updating a product.

    ``project_id`` may move the product to another project of the same owner.
    """

    title: str | None = Field(default=None, min_length=1, max_length=200)
    summary: str | None = Field(default=None, min_length=1, max_length=5000)
    description: str | None = Field(default=None, max_length=10000)
    product_url: HttpUrl | None = None
    product_type_id: UUID | None = None
    project_id: UUID | None = None
    is_public: bool | None = None

    @field_validator(
        "title", "summary", "product_type_id", "project_id", "is_public", mode="before"
    )
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Field cannot be null")
        if isinstance(v, str) and not v.strip():
            raise ValueError("Field cannot be empty or whitespace only")
        return v.strip() if isinstance(v, str) else v

    @field_validator("description", "product_url", mode="before")
    @classmethod
    def validate_optional_text(cls, v: Any) -> Any:
        return _blank_to_none(v)


class ProductRead(BaseModel):
    """Product with its type and attachments."""

    id: UUID
    title: str
    summary: str
    description: str | None
    product_url: str | None
    is_public: bool
    product_type_id: UUID
    project_id: UUID
    owner_id: str
    created_at: datetime
    updated_at: datetime
    product_type: ProductTypeRead
    attachments: list[AttachmentRead] = []

    model_config = {"from_attributes": True}


class ProductProjectRead(BaseModel):
    """Minimal parent project reference embedded in product responses."""

    id: UUID
    title: str
    is_public: bool

    model_config = {"from_attributes": True}


class ProductDetail(ProductRead):
    project: ProductProjectRead


class ProductList(BaseModel):
    products: list[ProductDetail]
    total: int
