"""Project model - owned research project."""

import json
from datetime import date, datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, Text, event
from sqlmodel import Field, Relationship, SQLModel

from src.nexus.models.base import utc_now
from src.nexus.models.enums import ProjectStatus
from src.nexus.models.user import User

if TYPE_CHECKING:
    from src.nexus.models.attachment import Attachment
    from src.nexus.models.product import Product


class Project(SQLModel, table=True):
    """Research project owned by the user who created it.

    Products and attachments are removed by ON DELETE CASCADE; the ORM side is
    declared with passive_deletes so it does not load children to delete them.
    """

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=200)
    summary: str = Field(max_length=5000)
    keywords: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    # Casefolded JSON text of `keywords`, kept in sync on flush
    keyword_index: str = Field(
        default="[]", sa_column=Column(Text, nullable=False, server_default="[]")
    )
    status: str = Field(default=ProjectStatus.PROPOSED.value, max_length=20)
    proponent_entity: str = Field(max_length=200)
    start_date: date | None = Field(default=None)
    end_date: date | None = Field(default=None)
    budget: float | None = Field(default=None)
    is_public: bool = Field(default=False, index=True)
    owner_id: str = Field(foreign_key="users.id", ondelete="CASCADE", index=True, max_length=255)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)

    owner: User = Relationship()
    products: list["Product"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True},
    )
    attachments: list["Attachment"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True},
    )

    @property
    def status_enum(self) -> ProjectStatus:
        """Get status as ProjectStatus enum."""
        return ProjectStatus(self.status)


def build_keyword_index(keywords: list[str]) -> str:
    """Serialize casefolded keywords the way public search quotes its term."""
    return json.dumps([keyword.casefold() for keyword in keywords])


@event.listens_for(Project, "before_insert")
@event.listens_for(Project, "before_update")
def _sync_keyword_index(mapper: object, connection: object, target: Project) -> None:
    target.keyword_index = build_keyword_index(target.keywords)
