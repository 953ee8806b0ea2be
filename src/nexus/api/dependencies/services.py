"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.nexus.api.dependencies.db import DBSession
from src.nexus.api.dependencies.repositories import (
    AttachmentRepo,
    ProductRepo,
    ProductTypeRepo,
    ProjectRepo,
)
from src.nexus.core.config import get_settings
from src.nexus.core.storage import StorageGateway, get_storage_gateway
from src.nexus.services import (
    AttachmentService,
    AuthorizationGuard,
    CleanupPolicy,
    ProductService,
    ProductTypeService,
    ProjectService,
    PublicProjectService,
)

StorageDep = Annotated[StorageGateway, Depends(get_storage_gateway)]


def get_cleanup_policy() -> CleanupPolicy:
    """Blob cleanup policy for attachment deletion, from settings."""
    return CleanupPolicy(get_settings().attachment_cleanup_policy)


CleanupPolicyDep = Annotated[CleanupPolicy, Depends(get_cleanup_policy)]


def get_authorization_guard(
    project_repo: ProjectRepo,
    product_repo: ProductRepo,
    attachment_repo: AttachmentRepo,
) -> AuthorizationGuard:
    return AuthorizationGuard(project_repo, product_repo, attachment_repo)


GuardDep = Annotated[AuthorizationGuard, Depends(get_authorization_guard)]


def get_project_service(
    project_repo: ProjectRepo, guard: GuardDep, session: DBSession
) -> ProjectService:
    """Get project service."""
    return ProjectService(project_repo, guard, session)


def get_product_service(
    product_repo: ProductRepo,
    product_type_repo: ProductTypeRepo,
    guard: GuardDep,
    session: DBSession,
) -> ProductService:
    """Get product service."""
    return ProductService(product_repo, product_type_repo, guard, session)


def get_product_type_service(
    product_type_repo: ProductTypeRepo, session: DBSession
) -> ProductTypeService:
    """Get product type service with the configured administrators."""
    return ProductTypeService(product_type_repo, session, get_settings().admin_user_ids)


def get_attachment_service(
    attachment_repo: AttachmentRepo,
    guard: GuardDep,
    storage: StorageDep,
    cleanup_policy: CleanupPolicyDep,
    session: DBSession,
) -> AttachmentService:
    """Get attachment service bound to the storage gateway and upload limits."""
    settings = get_settings()
    return AttachmentService(
        attachment_repo,
        guard,
        storage,
        session,
        root_folder=settings.storage_root_folder,
        max_bytes=settings.upload_max_bytes,
        max_files=settings.upload_max_files,
        cleanup_policy=cleanup_policy,
    )


def get_public_project_service(project_repo: ProjectRepo) -> PublicProjectService:
    """Get public project service (no identity required)."""
    settings = get_settings()
    return PublicProjectService(
        project_repo,
        max_limit=settings.public_max_limit,
        default_limit=settings.public_default_limit,
        showcase_limit=settings.public_showcase_limit,
    )


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
ProductTypeServiceDep = Annotated[ProductTypeService, Depends(get_product_type_service)]
AttachmentServiceDep = Annotated[AttachmentService, Depends(get_attachment_service)]
PublicProjectServiceDep = Annotated[PublicProjectService, Depends(get_public_project_service)]
