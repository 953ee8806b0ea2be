"""Caller identity: bearer tokens, the user mirror and the placeholder identity."""

from datetime import timedelta

import pytest
from fastapi import FastAPI
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from src.nexus.core.config import get_settings
from src.nexus.core.security import IdentityResolver, create_identity_token, get_identity_resolver
from src.nexus.models import Project, User
from tests.helpers import OWNER_ID, bearer, count_rows

pytestmark = pytest.mark.integration


@pytest.mark.parametrize(
    "authorization",
    ["Basic dXNlcjpwYXNz", "Bearer not-a-jwt", "Bearer "],
)
async def test_unusable_authorization_is_rejected(client: AsyncClient, authorization: str) -> None:
    response = await client.get("/api/v1/projects", headers={"Authorization": authorization})

    assert response.status_code == 401


async def test_expired_token_is_rejected(client: AsyncClient) -> None:
    token = create_identity_token(OWNER_ID, expires_delta=timedelta(minutes=-5))

    response = await client.get("/api/v1/projects", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid or expired token"


async def test_first_request_creates_user_mirror(
    client: AsyncClient, engine: AsyncEngine, db_session: AsyncSession
) -> None:
    response = await client.get(
        "/api/v1/projects", headers=bearer("new-user", name="New User", email="new@example.com")
    )

    assert response.status_code == 200
    assert await count_rows(engine, User) == 1
    user = await db_session.get(User, "new-user")
    assert user is not None
    assert user.name == "New User"
    assert user.email == "new@example.com"


async def test_user_mirror_follows_token_claims(client: AsyncClient, engine: AsyncEngine) -> None:
    await client.get("/api/v1/projects", headers=bearer("renamed", name="Old Name"))
    await client.get("/api/v1/projects", headers=bearer("renamed", name="New Name"))

    assert await count_rows(engine, User, User.name == "New Name") == 1
    assert await count_rows(engine, User) == 1


async def test_placeholder_identity_when_configured(
    app: FastAPI, client: AsyncClient, engine: AsyncEngine
) -> None:
    settings = get_settings()
    app.dependency_overrides[get_identity_resolver] = lambda: IdentityResolver(
        secret=settings.auth_jwt_secret,
        placeholder_user_id="placeholder-user",
        placeholder_user_name="Development User",
    )

    response = await client.post(
        "/api/v1/projects",
        json={
            "title": "Placeholder project",
            "summary": "Created without a token",
            "keywords": ["dev"],
            "proponent_entity": "Lab",
        },
    )

    assert response.status_code == 201
    assert response.json()["owner_id"] == "placeholder-user"
    assert await count_rows(engine, Project, Project.owner_id == "placeholder-user") == 1


async def test_token_wins_over_placeholder(app: FastAPI, client: AsyncClient) -> None:
    settings = get_settings()
    app.dependency_overrides[get_identity_resolver] = lambda: IdentityResolver(
        secret=settings.auth_jwt_secret, placeholder_user_id="placeholder-user"
    )

    response = await client.post(
        "/api/v1/projects",
        json={
            "title": "Token project",
            "summary": "Created with a token",
            "keywords": ["dev"],
            "proponent_entity": "Lab",
        },
        headers=bearer(OWNER_ID),
    )

    assert response.json()["owner_id"] == OWNER_ID
