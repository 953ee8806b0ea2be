"""Repository for Attachment entity."""

from uuid import UUID

from sqlalchemy import or_
from sqlmodel import select

from src.nexus.models import Attachment, Product, Project
from src.nexus.repositories.base import BaseRepository


class AttachmentRepository(BaseRepository[Attachment]):
    """Repository for Attachment entity.

    Attachments have no owner column; ownership is that of the parent project
    or product and is resolved in the same query.
    """

    model = Attachment

    async def get_owned(self, id: UUID, owner_id: str) -> Attachment | None:
        """Get an attachment only if its parent project or product belongs to ``owner_id``."""
        query = (
            select(Attachment)
            .outerjoin(Project, Attachment.project_id == Project.id)  # type: ignore[arg-type]
            .outerjoin(Product, Attachment.product_id == Product.id)  # type: ignore[arg-type]
            .where(
                Attachment.id == id,
                or_(Project.owner_id == owner_id, Product.owner_id == owner_id),
            )
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

