from src.nexus.schemas.attachment import (
    AttachmentBatchResponse,
    AttachmentOutcome,
    AttachmentRead,
    AttachmentTarget,
    AttachmentUpload,
    AttachmentUploadResponse,
    MessageResponse,
)
from src.nexus.schemas.pagination import OffsetPagination
from src.nexus.schemas.product import (
    ProductCreate,
    ProductDetail,
    ProductList,
    ProductRead,
    ProductUpdate,
)
from src.nexus.schemas.product_type import ProductTypeCreate, ProductTypeRead
from src.nexus.schemas.project import (
    ProjectCreate,
    ProjectDetail,
    ProjectList,
    ProjectRead,
    ProjectSummary,
    ProjectUpdate,
)
from src.nexus.schemas.public import PublicProductRead, PublicProjectPage, PublicProjectRead

__all__ = [
    # Attachment
    "AttachmentBatchResponse",
    "AttachmentOutcome",
    "AttachmentRead",
    "AttachmentTarget",
    "AttachmentUpload",
    "AttachmentUploadResponse",
    "MessageResponse",
    # Pagination
    "OffsetPagination",
    # Product
    "ProductCreate",
    "ProductDetail",
    "ProductList",
    "ProductRead",
    "ProductUpdate",
    # Product type
    "ProductTypeCreate",
    "ProductTypeRead",
    # Project
    "ProjectCreate",
    "ProjectDetail",
    "ProjectList",
    "ProjectRead",
    "ProjectSummary",
    "ProjectUpdate",
    # Public
    "PublicProductRead",
    "PublicProjectPage",
    "PublicProjectRead",
]
