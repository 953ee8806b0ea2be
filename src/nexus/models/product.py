"""Product model - result or deliverable of a project."""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

from src.nexus.models.base import utc_now
from src.nexus.models.product_type import ProductType

if TYPE_CHECKING:
    from src.nexus.models.attachment import Attachment
    from src.nexus.models.project import Project


class Product(SQLModel, table=True):
    """Product of a project.

    ``owner_id`` duplicates the parent project's owner so ownership checks do not
    need a join; services keep the two equal.
    """

    __tablename__ = "products"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=200)
    summary: str = Field(max_length=5000)
    description: str | None = Field(default=None, max_length=10000)
    product_url: str | None = Field(default=None, max_length=2048)
    is_public: bool = Field(default=False, index=True)
    product_type_id: UUID = Field(foreign_key="product_types.id", index=True)
    project_id: UUID = Field(foreign_key="projects.id", ondelete="CASCADE", index=True)
    owner_id: str = Field(foreign_key="users.id", ondelete="CASCADE", index=True, max_length=255)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)

    project: "Project" = Relationship(back_populates="products")
    product_type: ProductType = Relationship()
    attachments: list["Attachment"] = Relationship(
        back_populates="product",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True},
    )
