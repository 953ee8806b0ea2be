"""Read-only queries over public projects."""

from uuid import UUID

from src.nexus.core.exceptions import NotFound
from src.nexus.repositories import ProjectRepository, ProjectWithCounts
from src.nexus.schemas.pagination import OffsetPagination


class PublicProjectService:
    """Public listing and search. No identity involved."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        max_limit: int,
        default_limit: int = 10,
        showcase_limit: int = 6,
    ):
        self.project_repo = project_repo
        self.max_limit = max_limit
        self.default_limit = default_limit
        self.showcase_limit = showcase_limit

    async def list_public(
        self, limit: int | None, offset: int, search: str | None = None
    ) -> tuple[list[ProjectWithCounts], OffsetPagination]:
        """List public projects, newest first.

        Only public products are included. ``search`` is trimmed; a blank term
        means no search. ``limit`` defaults to ``default_limit``. At most
        ``max_limit`` rows are returned whatever the requested limit; the
        pagination block still reports the requested one.

        Returns:
            Tuple of (rows, pagination)
        """
        limit = limit if limit is not None else self.default_limit
        term = search.strip() if search else None
        take = min(limit, self.max_limit)
        rows, total = await self.project_repo.list_public(take, offset, term or None)
        return rows, OffsetPagination.build(total=total, limit=limit, offset=offset)

    async def showcase(
        self, limit: int | None = None
    ) -> tuple[list[ProjectWithCounts], OffsetPagination]:
        """First page of public projects, ``showcase_limit`` long by default."""
        return await self.list_public(limit if limit is not None else self.showcase_limit, 0)

    async def get_public(self, project_id: UUID) -> ProjectWithCounts:
        row = await self.project_repo.get_public(project_id)
        if row is None:
            raise NotFound("Project not found")
        return row
