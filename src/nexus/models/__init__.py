"""Model exports.

Import from here: `from src.nexus.models import Project, Product`.
Importing this package registers every table on SQLModel.metadata.
"""

# Enums
from src.nexus.models.enums import AttachmentEntityType, ProjectStatus

# Tables
from src.nexus.models.user import User
from src.nexus.models.project import Project  # noqa: I001 - relationship targets below
from src.nexus.models.product_type import ProductType
from src.nexus.models.product import Product
from src.nexus.models.attachment import Attachment

__all__ = [
    # Enums
    "AttachmentEntityType",
    "ProjectStatus",
    # Tables
    "Attachment",
    "Product",
    "ProductType",
    "Project",
    "User",
]
