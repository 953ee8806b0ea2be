"""Project endpoints - owner-scoped CRUD."""

from uuid import UUID

from fastapi import APIRouter, status

from src.nexus.api.dependencies import CurrentIdentity, ProjectServiceDep
from src.nexus.schemas.attachment import MessageResponse
from src.nexus.schemas.project import (
    ProjectCreate,
    ProjectDetail,
    ProjectList,
    ProjectSummary,
    ProjectUpdate,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    response_model=ProjectList,
    summary="List my projects",
    description="List the caller's projects, newest first, with product and attachment counts.",
    responses={
        200: {"description": "Projects owned by the caller"},
        401: {"description": "Not authenticated"},
    },
)
async def list_projects(service: ProjectServiceDep, identity: CurrentIdentity) -> ProjectList:
    rows, total = await service.list_projects(identity.user_id)
    return ProjectList(projects=[ProjectSummary.from_row(row) for row in rows], total=total)


@router.post(
    "",
    response_model=ProjectDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={
        201: {"description": "Project created in status PROPOSED"},
        400: {"description": "Invalid project data"},
        401: {"description": "Not authenticated"},
    },
)
async def create_project(
    request: ProjectCreate,
    service: ProjectServiceDep,
    identity: CurrentIdentity,
) -> ProjectDetail:
    """Create a new project owned by the caller."""
    project = await service.create_project(request, identity.user_id)
    return ProjectDetail.model_validate(project)


@router.get(
    "/{project_id}",
    response_model=ProjectDetail,
    summary="Get project",
    description="Get an owned project with its products and attachments.",
    responses={
        200: {"description": "Project details"},
        404: {"description": "Project not found"},
    },
)
async def get_project(
    project_id: UUID,
    service: ProjectServiceDep,
    identity: CurrentIdentity,
) -> ProjectDetail:
    project = await service.get_project(project_id, identity.user_id)
    return ProjectDetail.model_validate(project)


@router.put(
    "/{project_id}",
    response_model=ProjectDetail,
    summary="Update project",
    description="Update the fields present in the body. Omitted fields are left unchanged.",
    responses={
        200: {"description": "Project updated"},
        400: {"description": "Invalid project data"},
        404: {"description": "Project not found"},
    },
)
async def update_project(
    project_id: UUID,
    request: ProjectUpdate,
    service: ProjectServiceDep,
    identity: CurrentIdentity,
) -> ProjectDetail:
    project = await service.update_project(project_id, request, identity.user_id)
    return ProjectDetail.model_validate(project)


@router.delete(
    "/{project_id}",
    response_model=MessageResponse,
    summary="Delete project",
    description="Delete an owned project together with its products and attachments.",
    responses={
        200: {"description": "Project deleted"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(
    project_id: UUID,
    service: ProjectServiceDep,
    identity: CurrentIdentity,
) -> MessageResponse:
    await service.delete_project(project_id, identity.user_id)
    return MessageResponse(message="Project deleted")
