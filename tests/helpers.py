"""Test helper functions for common data creation patterns."""

from typing import Any

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlmodel import select

from src.nexus.core.security import create_identity_token
from src.nexus.models import Product, ProductType, Project, User
from tests.factories import ProductFactory, ProductTypeFactory, ProjectFactory, UserFactory

OWNER_ID = "owner-user"
OTHER_USER_ID = "other-user"
ADMIN_USER_ID = "admin-user"


def bearer(user_id: str, name: str | None = None, email: str | None = None) -> dict[str, str]:
    """Authorization header carrying an identity token for ``user_id``."""
    token = create_identity_token(user_id, name=name, email=email)
    return {"Authorization": f"Bearer {token}"}


async def ensure_user(session: AsyncSession, user_id: str, name: str = "Test User") -> User:
    """Get or create the user mirror row for ``user_id``."""
    user = await session.get(User, user_id)
    if user is None:
        user = UserFactory.build(id=user_id, name=name)
        session.add(user)
        await session.flush()
    return user


async def create_project(session: AsyncSession, owner_id: str, **kwargs: Any) -> Project:
    """Create and commit a project (and its owner's user row if missing)."""
    await ensure_user(session, owner_id)
    project = ProjectFactory.build(owner_id=owner_id, **kwargs)
    session.add(project)
    await session.commit()
    return project


async def create_product_type(session: AsyncSession, **kwargs: Any) -> ProductType:
    product_type = ProductTypeFactory.build(**kwargs)
    session.add(product_type)
    await session.commit()
    return product_type


async def create_product(
    session: AsyncSession,
    project: Project,
    product_type: ProductType,
    **kwargs: Any,
) -> Product:
    """Create and commit a product under ``project`` with the project's owner."""
    product = ProductFactory.build(
        project_id=project.id,
        product_type_id=product_type.id,
        owner_id=project.owner_id,
        **kwargs,
    )
    session.add(product)
    await session.commit()
    return product


async def count_rows(engine: AsyncEngine, model: type, *where: Any) -> int:
    """Count rows of ``model`` through a fresh session."""
    async with AsyncSession(engine) as session:
        query = select(func.count()).select_from(model)
        if where:
            query = query.where(*where)
        result = await session.execute(query)
        return int(result.scalar_one())
