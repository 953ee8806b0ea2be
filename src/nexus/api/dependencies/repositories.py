"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.nexus.api.dependencies.db import DBSession
from src.nexus.repositories import (
    AttachmentRepository,
    ProductRepository,
    ProductTypeRepository,
    ProjectRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_product_repository(session: DBSession) -> ProductRepository:
    return ProductRepository(session)


def get_product_type_repository(session: DBSession) -> ProductTypeRepository:
    return ProductTypeRepository(session)


def get_attachment_repository(session: DBSession) -> AttachmentRepository:
    return AttachmentRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
ProductRepo = Annotated[ProductRepository, Depends(get_product_repository)]
ProductTypeRepo = Annotated[ProductTypeRepository, Depends(get_product_type_repository)]
AttachmentRepo = Annotated[AttachmentRepository, Depends(get_attachment_repository)]
