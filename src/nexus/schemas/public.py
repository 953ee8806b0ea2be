"""Public projection schemas for the unauthenticated listing."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from src.nexus.models.enums import ProjectStatus
from src.nexus.schemas.pagination import OffsetPagination
from src.nexus.schemas.product_type import ProductTypeRead


class PublicProductRead(BaseModel):
    id: UUID
    title: str
    summary: str
    description: str | None
    product_url: str | None
    product_type: ProductTypeRead
    created_at: datetime

    model_config = {"from_attributes": True}


class PublicProjectRead(BaseModel):
    """Public fields of a project; owner identity reduced to a display name."""

    id: UUID
    title: str
    summary: str
    keywords: list[str]
    status: ProjectStatus
    proponent_entity: str
    start_date: date | None
    end_date: date | None
    budget: float | None
    created_at: datetime
    updated_at: datetime
    owner_name: str | None
    products: list[PublicProductRead]
    products_count: int
    attachments_count: int

    @classmethod
    def from_row(cls, row: tuple[Any, int, int]) -> "PublicProjectRead":
        """Build the public projection from a (project, products_count, attachments_count) row.

        The project must have been loaded with only its public products.
        """
        project, products_count, attachments_count = row
        return cls(
            id=project.id,
            title=project.title,
            summary=project.summary,
            keywords=project.keywords,
            status=project.status,
            proponent_entity=project.proponent_entity,
            start_date=project.start_date,
            end_date=project.end_date,
            budget=project.budget,
            created_at=project.created_at,
            updated_at=project.updated_at,
            owner_name=project.owner.name if project.owner else None,
            products=[PublicProductRead.model_validate(p) for p in project.products],
            products_count=products_count,
            attachments_count=attachments_count,
        )


class PublicProjectPage(BaseModel):
    projects: list[PublicProjectRead]
    pagination: OffsetPagination
