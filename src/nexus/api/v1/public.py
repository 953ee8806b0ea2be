"""Public project endpoints - no authentication."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from src.nexus.api.dependencies import PublicProjectServiceDep
from src.nexus.schemas.public import PublicProjectPage, PublicProjectRead

router = APIRouter(prefix="/public/projects", tags=["public"])


@router.get(
    "",
    response_model=PublicProjectPage,
    summary="List public projects",
    description=(
        "Public projects, newest first, with their public products. `search` matches "
        "title or summary (substring) or a keyword (exact), case-insensitively."
    ),
    responses={
        200: {"description": "Page of public projects"},
        400: {"description": "Invalid pagination parameters"},
    },
)
async def list_public_projects(
    service: PublicProjectServiceDep,
    limit: Annotated[int | None, Query(ge=1, description="Page size, capped server-side")] = None,
    offset: Annotated[int, Query(ge=0, description="Rows to skip")] = 0,
    search: Annotated[str | None, Query(max_length=200, description="Search term")] = None,
) -> PublicProjectPage:
    rows, pagination = await service.list_public(limit, offset, search)
    return PublicProjectPage(
        projects=[PublicProjectRead.from_row(row) for row in rows],
        pagination=pagination,
    )


@router.get(
    "/showcase",
    response_model=PublicProjectPage,
    summary="Showcase public projects",
    description="The most recent public projects, for landing pages.",
)
async def showcase_public_projects(
    service: PublicProjectServiceDep,
    limit: Annotated[int | None, Query(ge=1, description="Page size, capped server-side")] = None,
) -> PublicProjectPage:
    rows, pagination = await service.showcase(limit)
    return PublicProjectPage(
        projects=[PublicProjectRead.from_row(row) for row in rows],
        pagination=pagination,
    )


@router.get(
    "/{project_id}",
    response_model=PublicProjectRead,
    summary="Get public project",
    responses={
        200: {"description": "Public project"},
        404: {"description": "Project not found"},
    },
)
async def get_public_project(
    project_id: UUID,
    service: PublicProjectServiceDep,
) -> PublicProjectRead:
    row = await service.get_public(project_id)
    return PublicProjectRead.from_row(row)
