from src.nexus.services.attachment_service import (
    AttachmentResult,
    AttachmentService,
    CleanupPolicy,
    UploadedFile,
)
from src.nexus.services.authorization import AuthorizationGuard
from src.nexus.services.product_service import ProductService
from src.nexus.services.product_type_service import ProductTypeService
from src.nexus.services.project_service import ProjectService
from src.nexus.services.public_project_service import PublicProjectService
from src.nexus.services.user_service import UserService

__all__ = [
    "AttachmentResult",
    "AttachmentService",
    "AuthorizationGuard",
    "CleanupPolicy",
    "ProductService",
    "ProductTypeService",
    "ProjectService",
    "PublicProjectService",
    "UploadedFile",
    "UserService",
]
