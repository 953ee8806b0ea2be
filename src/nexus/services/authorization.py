"""Ownership checks for entity-scoped operations."""

from uuid import UUID

from src.nexus.core.exceptions import NotFound
from src.nexus.models import Attachment, AttachmentEntityType, Product, Project
from src.nexus.repositories import AttachmentRepository, ProductRepository, ProjectRepository


class AuthorizationGuard:
    """Resolves an entity only if the caller owns it.

    A row owned by someone else is reported exactly like a missing one, so the
    API never reveals that another user's entity exists.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        product_repo: ProductRepository,
        attachment_repo: AttachmentRepository,
    ):
        self.project_repo = project_repo
        self.product_repo = product_repo
        self.attachment_repo = attachment_repo

    async def require_project(
        self,
        project_id: UUID,
        owner_id: str,
        *,
        with_details: bool = False,
        message: str = "Project not found",
    ) -> Project:
        if with_details:
            project = await self.project_repo.get_owned_with_details(project_id, owner_id)
        else:
            project = await self.project_repo.get_owned(project_id, owner_id)
        if project is None:
            raise NotFound(message)
        return project

    async def require_product(
        self, product_id: UUID, owner_id: str, *, with_details: bool = False
    ) -> Product:
        if with_details:
            product = await self.product_repo.get_owned_with_details(product_id, owner_id)
        else:
            product = await self.product_repo.get_owned(product_id, owner_id)
        if product is None:
            raise NotFound("Product not found")
        return product

    async def require_attachment(self, attachment_id: UUID, owner_id: str) -> Attachment:
        attachment = await self.attachment_repo.get_owned(attachment_id, owner_id)
        if attachment is None:
            raise NotFound("Attachment not found")
        return attachment

    async def require_parent(
        self, entity_type: AttachmentEntityType, entity_id: UUID, owner_id: str
    ) -> Project | Product:
        """Resolve the project or product an attachment would hang from."""
        if entity_type == AttachmentEntityType.PROJECT:
            return await self.require_project(entity_id, owner_id)
        return await self.require_product(entity_id, owner_id)
