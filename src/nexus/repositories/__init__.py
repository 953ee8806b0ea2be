"""Repository layer - data access abstraction.

Re-exports all repositories for convenient imports.
"""

from src.nexus.repositories.attachment import AttachmentRepository
from src.nexus.repositories.base import BaseRepository, OwnedRepository
from src.nexus.repositories.product import ProductRepository
from src.nexus.repositories.product_type import ProductTypeRepository
from src.nexus.repositories.project import ProjectRepository, ProjectWithCounts
from src.nexus.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "OwnedRepository",
    # Entities
    "AttachmentRepository",
    "ProductRepository",
    "ProductTypeRepository",
    "ProjectRepository",
    "ProjectWithCounts",
    "UserRepository",
]
