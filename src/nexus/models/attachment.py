"""Attachment model - file stored in the blob store, hanging from a project or product."""

from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint
from sqlmodel import Field, Relationship, SQLModel

from src.nexus.models.base import utc_now
from src.nexus.models.enums import AttachmentEntityType

if TYPE_CHECKING:
    from src.nexus.models.product import Product
    from src.nexus.models.project import Project


class Attachment(SQLModel, table=True):
    """Uploaded file metadata.

    Exactly one of project_id/product_id is set (check constraint). The row is
    only written after the blob upload succeeded; ``storage_key`` is what the
    gateway needs to delete the blob again.
    """

    __tablename__ = "attachments"
    __table_args__ = (
        CheckConstraint(
            "(project_id IS NULL) <> (product_id IS NULL)",
            name="ck_attachments_single_parent",
        ),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    url: str = Field(max_length=2048)
    storage_key: str = Field(max_length=1024)
    file_name: str = Field(max_length=255)
    file_size: int
    mime_type: str = Field(max_length=255)
    project_id: UUID | None = Field(
        default=None, foreign_key="projects.id", ondelete="CASCADE", index=True
    )
    product_id: UUID | None = Field(
        default=None, foreign_key="products.id", ondelete="CASCADE", index=True
    )
    created_at: datetime = Field(default_factory=utc_now)

    project: Optional["Project"] = Relationship(back_populates="attachments")
    product: Optional["Product"] = Relationship(back_populates="attachments")

    @property
    def entity_type(self) -> AttachmentEntityType:
        if self.project_id is not None:
            return AttachmentEntityType.PROJECT
        return AttachmentEntityType.PRODUCT

    @property
    def entity_id(self) -> UUID:
        if self.project_id is not None:
            return self.project_id
        return self.product_id  # type: ignore[return-value]
