"""Project service - owner-scoped project CRUD."""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.nexus.core.exceptions import UpstreamFailure, ValidationError
from src.nexus.core.logging import get_logger
from src.nexus.models import Project, ProjectStatus
from src.nexus.models.base import touch
from src.nexus.repositories import ProjectRepository, ProjectWithCounts
from src.nexus.schemas.project import ProjectCreate, ProjectUpdate
from src.nexus.services.authorization import AuthorizationGuard
from src.nexus.services.persistence import commit_or_fail

logger = get_logger(__name__)


class ProjectService:
    """Project operations. Every call is scoped to ``owner_id``."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        guard: AuthorizationGuard,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.guard = guard
        self.session = session

    async def create_project(self, data: ProjectCreate, owner_id: str) -> Project:
        """Create a project owned by ``owner_id`` in status PROPOSED.

        Returns:
            The project with its (empty) products and attachments loaded
        """
        project = Project(
            **data.model_dump(),
            status=ProjectStatus.PROPOSED.value,
            owner_id=owner_id,
        )
        self.project_repo.add(project)
        await commit_or_fail(self.session, "create project")
        logger.info("Project created", project_id=str(project.id), owner_id=owner_id)
        return await self._reload(project.id, owner_id)

    async def get_project(self, project_id: UUID, owner_id: str) -> Project:
        """Get an owned project with products (type, attachments) and attachments.

        Raises:
            NotFound: If the project does not exist or belongs to someone else
        """
        return await self.guard.require_project(project_id, owner_id, with_details=True)

    async def list_projects(self, owner_id: str) -> tuple[list[ProjectWithCounts], int]:
        """List owned projects, newest first, with product and attachment counts.

        Returns:
            Tuple of (rows, total)
        """
        rows = await self.project_repo.list_owned_with_counts(owner_id)
        return rows, len(rows)

    async def update_project(self, project_id: UUID, data: ProjectUpdate, owner_id: str) -> Project:
        """Apply the fields present in ``data`` to an owned project.

        Raises:
            NotFound: If the project does not exist or belongs to someone else
            ValidationError: If the merged dates leave end_date before start_date
        """
        project = await self.guard.require_project(project_id, owner_id)
        changes: dict[str, Any] = data.model_dump(exclude_unset=True)
        if "status" in changes:
            changes["status"] = ProjectStatus(changes["status"]).value

        start_date = changes.get("start_date", project.start_date)
        end_date = changes.get("end_date", project.end_date)
        if start_date and end_date and end_date < start_date:
            raise ValidationError(
                details=[{"field": "end_date", "message": "end_date cannot be before start_date"}]
            )

        for field, value in changes.items():
            setattr(project, field, value)
        touch(project)

        await commit_or_fail(self.session, "update project")
        logger.info(
            "Project updated",
            project_id=str(project_id),
            fields=sorted(changes),
        )
        return await self._reload(project_id, owner_id)

    async def delete_project(self, project_id: UUID, owner_id: str) -> None:
        """Delete an owned project. Products and attachments go with it (ON DELETE CASCADE).

        Stored blobs of cascaded attachments are not removed from the blob store.
        """
        project = await self.guard.require_project(project_id, owner_id)
        await self.project_repo.delete(project)
        await commit_or_fail(self.session, "delete project")
        logger.info("Project deleted", project_id=str(project_id), owner_id=owner_id)

    async def _reload(self, project_id: UUID, owner_id: str) -> Project:
        project = await self.project_repo.get_owned_with_details(project_id, owner_id)
        if project is None:
            raise UpstreamFailure("Project vanished after write")
        return project
