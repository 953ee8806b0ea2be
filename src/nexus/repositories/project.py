"""Repository for Project entity."""

import json
from typing import Any
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.orm import selectinload
from sqlmodel import select

from src.nexus.models import Attachment, Product, Project
from src.nexus.repositories.base import OwnedRepository

ProjectWithCounts = tuple[Project, int, int]


def products_count_column() -> Any:
    """Correlated count of all products (public and private) of a project."""
    return (
        select(func.count(Product.id))
        .where(Product.project_id == Project.id)
        .correlate(Project)
        .scalar_subquery()
        .label("products_count")
    )


def attachments_count_column() -> Any:
    """Correlated count of the attachments stored directly on a project."""
    return (
        select(func.count(Attachment.id))
        .where(Attachment.project_id == Project.id)
        .correlate(Project)
        .scalar_subquery()
        .label("attachments_count")
    )


def detail_options() -> tuple[Any, ...]:
    """Eager loads for the full owner view of a project."""
    return (
        selectinload(Project.products).selectinload(Product.product_type),
        selectinload(Project.products).selectinload(Product.attachments),
        selectinload(Project.attachments),
    )


def public_options() -> tuple[Any, ...]:
    """Eager loads for the public projection: public products only, plus the owner."""
    is_public = Product.is_public == True  # noqa: E712
    public_products = Project.products.and_(is_public)  # type: ignore[attr-defined]
    return (
        selectinload(public_products).selectinload(Product.product_type),
        selectinload(Project.owner),
    )


def public_search_clause(search: str) -> Any:
    """Case-insensitive match on title, summary, or exact keyword.

    Keywords are matched through `Project.keyword_index`, a JSON array of
    casefolded keywords; the JSON-quoted casefolded term selects whole elements
    only, and both sides are escaped the same way for non-ASCII letters.
    """
    keyword_needle = json.dumps(search.casefold())
    keyword_index = Project.keyword_index  # type: ignore[attr-defined]
    return or_(
        Project.title.icontains(search, autoescape=True),  # type: ignore[attr-defined]
        Project.summary.icontains(search, autoescape=True),  # type: ignore[attr-defined]
        keyword_index.contains(keyword_needle, autoescape=True),
    )


class ProjectRepository(OwnedRepository[Project]):
    """Repository for Project entity."""

    model = Project

    async def get_owned_with_details(self, id: UUID, owner_id: str) -> Project | None:
        """Get an owned project with products (type, attachments) and attachments loaded."""
        return await self.get_owned(id, owner_id, options=detail_options())

    async def list_owned_with_counts(self, owner_id: str) -> list[ProjectWithCounts]:
        """List a user's projects, newest first, with product/attachment counts."""
        query = (
            select(Project, products_count_column(), attachments_count_column())
            .where(Project.owner_id == owner_id)
            .order_by(Project.created_at.desc(), Project.id)  # type: ignore[attr-defined]
        )
        result = await self.session.execute(query)
        return [(row[0], int(row[1]), int(row[2])) for row in result.all()]

    def _public_filters(self, search: str | None) -> list[Any]:
        filters: list[Any] = [Project.is_public == True]  # noqa: E712
        if search:
            filters.append(public_search_clause(search))
        return filters

    async def list_public(
        self,
        limit: int,
        offset: int,
        search: str | None = None,
    ) -> tuple[list[ProjectWithCounts], int]:
        """List public projects with only their public products.

        Args:
            limit: Rows to take (already capped by the caller)
            offset: Rows to skip
            search: Optional non-empty search term

        Returns:
            Tuple of (rows, total) where total counts the same filter unpaginated
        """
        filters = self._public_filters(search)
        total = await self.count(select(Project).where(*filters))

        query = (
            select(Project, products_count_column(), attachments_count_column())
            .where(*filters)
            .options(*public_options())
            .order_by(Project.created_at.desc(), Project.id)  # type: ignore[attr-defined]
            .limit(limit)
            .offset(offset)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        rows = [(row[0], int(row[1]), int(row[2])) for row in result.all()]
        return rows, total

    async def get_public(self, id: UUID) -> ProjectWithCounts | None:
        """Get one public project in the public projection."""
        query = (
            select(Project, products_count_column(), attachments_count_column())
            .where(Project.id == id, Project.is_public == True)  # noqa: E712
            .options(*public_options())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        row = result.first()
        if row is None:
            return None
        return row[0], int(row[1]), int(row[2])
