"""FastAPI dependencies: database session, identity, repositories and services."""

# Auth
from src.nexus.api.dependencies.auth import (
    CurrentIdentity,
    IdentityResolverDep,
    get_current_identity,
)

# Database
from src.nexus.api.dependencies.db import DBSession, get_db_session

# Repositories
from src.nexus.api.dependencies.repositories import (
    AttachmentRepo,
    ProductRepo,
    ProductTypeRepo,
    ProjectRepo,
    UserRepo,
    get_attachment_repository,
    get_product_repository,
    get_product_type_repository,
    get_project_repository,
    get_user_repository,
)

# Services
from src.nexus.api.dependencies.services import (
    AttachmentServiceDep,
    CleanupPolicyDep,
    GuardDep,
    ProductServiceDep,
    ProductTypeServiceDep,
    ProjectServiceDep,
    PublicProjectServiceDep,
    StorageDep,
    get_attachment_service,
    get_authorization_guard,
    get_cleanup_policy,
    get_product_service,
    get_product_type_service,
    get_project_service,
    get_public_project_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "CurrentIdentity",
    "IdentityResolverDep",
    "get_current_identity",
    # Repositories
    "AttachmentRepo",
    "ProductRepo",
    "ProductTypeRepo",
    "ProjectRepo",
    "UserRepo",
    "get_attachment_repository",
    "get_product_repository",
    "get_product_type_repository",
    "get_project_repository",
    "get_user_repository",
    # Services
    "AttachmentServiceDep",
    "CleanupPolicyDep",
    "GuardDep",
    "ProductServiceDep",
    "ProductTypeServiceDep",
    "ProjectServiceDep",
    "PublicProjectServiceDep",
    "StorageDep",
    "get_attachment_service",
    "get_authorization_guard",
    "get_cleanup_policy",
    "get_product_service",
    "get_product_type_service",
    "get_project_service",
    "get_public_project_service",
]
