"""Owner-scoped project endpoints."""

from datetime import date
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from src.nexus.models import Attachment, Product, Project
from tests.factories import AttachmentFactory
from tests.helpers import (
    OTHER_USER_ID,
    OWNER_ID,
    count_rows,
    create_product,
    create_product_type,
    create_project,
)

pytestmark = pytest.mark.integration

MINIMAL_PROJECT = {
    "title": "A",
    "summary": "B",
    "keywords": ["x"],
    "proponent_entity": "E",
}


async def test_create_project_defaults(client: AsyncClient, owner_headers: dict) -> None:
    response = await client.post("/api/v1/projects", json=MINIMAL_PROJECT, headers=owner_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "PROPOSED"
    assert data["is_public"] is False
    assert data["owner_id"] == OWNER_ID
    assert data["products"] == []
    assert data["attachments"] == []


async def test_create_project_parses_dates_and_budget(
    client: AsyncClient, owner_headers: dict
) -> None:
    payload = {
        **MINIMAL_PROJECT,
        "start_date": "2024-01-15T00:00:00.000Z",
        "end_date": "2024-12-31",
        "budget": 1500.5,
    }
    response = await client.post("/api/v1/projects", json=payload, headers=owner_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["start_date"] == "2024-01-15"
    assert data["end_date"] == "2024-12-31"
    assert data["budget"] == 1500.5


async def test_create_project_requires_auth(client: AsyncClient) -> None:
    response = await client.post("/api/v1/projects", json=MINIMAL_PROJECT)

    assert response.status_code == 401
    assert response.json()["error"] == "Missing authorization header"


async def test_create_project_rejects_invalid_token(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/projects",
        json=MINIMAL_PROJECT,
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == 401


@pytest.mark.parametrize(
    ("override", "field"),
    [
        ({"title": "   "}, "title"),
        ({"title": "x" * 201}, "title"),
        ({"summary": ""}, "summary"),
        ({"keywords": []}, "keywords"),
        ({"keywords": ["ok", " "]}, "keywords"),
        ({"proponent_entity": ""}, "proponent_entity"),
        ({"budget": -1}, "budget"),
        ({"start_date": "not-a-date"}, "start_date"),
    ],
)
async def test_create_project_validation(
    client: AsyncClient, owner_headers: dict, engine: AsyncEngine, override: dict, field: str
) -> None:
    response = await client.post(
        "/api/v1/projects", json={**MINIMAL_PROJECT, **override}, headers=owner_headers
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid data"
    assert any(detail["field"] == field for detail in body["details"])
    assert "request_id" in body
    assert await count_rows(engine, Project) == 0


async def test_create_project_rejects_end_before_start(
    client: AsyncClient, owner_headers: dict
) -> None:
    payload = {**MINIMAL_PROJECT, "start_date": "2024-06-01", "end_date": "2024-01-01"}
    response = await client.post("/api/v1/projects", json=payload, headers=owner_headers)

    assert response.status_code == 400


async def test_get_project_only_for_owner(
    client: AsyncClient,
    owner_headers: dict,
    other_headers: dict,
    owned_project: Project,
) -> None:
    own = await client.get(f"/api/v1/projects/{owned_project.id}", headers=owner_headers)
    foreign = await client.get(f"/api/v1/projects/{owned_project.id}", headers=other_headers)
    missing = await client.get(f"/api/v1/projects/{uuid4()}", headers=owner_headers)

    assert own.status_code == 200
    assert own.json()["id"] == str(owned_project.id)
    # Someone else's project is indistinguishable from a missing one
    assert foreign.status_code == 404
    assert missing.status_code == 404
    assert foreign.json()["error"] == missing.json()["error"]


async def test_get_project_includes_products_and_attachments(
    client: AsyncClient,
    owner_headers: dict,
    db_session: AsyncSession,
    owned_project: Project,
) -> None:
    product_type = await create_product_type(db_session)
    product = await create_product(db_session, owned_project, product_type)
    db_session.add(AttachmentFactory.build(product_id=product.id))
    db_session.add(AttachmentFactory.build(project_id=owned_project.id))
    await db_session.commit()

    response = await client.get(f"/api/v1/projects/{owned_project.id}", headers=owner_headers)

    data = response.json()
    assert len(data["products"]) == 1
    assert data["products"][0]["product_type"]["code"] == product_type.code
    assert len(data["products"][0]["attachments"]) == 1
    assert len(data["attachments"]) == 1


async def test_list_projects_newest_first_with_counts(
    client: AsyncClient,
    owner_headers: dict,
    db_session: AsyncSession,
) -> None:
    older = await create_project(db_session, OWNER_ID, title="Older")
    newer = await create_project(db_session, OWNER_ID, title="Newer")
    await create_project(db_session, OTHER_USER_ID, title="Foreign")
    product_type = await create_product_type(db_session)
    await create_product(db_session, older, product_type)
    await create_product(db_session, older, product_type, is_public=True)
    db_session.add(AttachmentFactory.build(project_id=older.id))
    await db_session.commit()
    # Force a deterministic ordering independent of clock resolution
    older.created_at = older.created_at.replace(year=2020)
    await db_session.commit()

    response = await client.get("/api/v1/projects", headers=owner_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert [p["id"] for p in data["projects"]] == [str(newer.id), str(older.id)]
    assert data["projects"][1]["products_count"] == 2
    assert data["projects"][1]["attachments_count"] == 1
    assert data["projects"][0]["products_count"] == 0


async def test_update_project_partial(
    client: AsyncClient, owner_headers: dict, owned_project: Project
) -> None:
    response = await client.put(
        f"/api/v1/projects/{owned_project.id}",
        json={"status": "IN_PROGRESS", "is_public": True, "keywords": [" ai ", "energy"]},
        headers=owner_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "IN_PROGRESS"
    assert data["is_public"] is True
    assert data["keywords"] == ["ai", "energy"]
    assert data["title"] == owned_project.title
    assert data["updated_at"] >= data["created_at"]


async def test_update_project_clears_optional_fields(
    client: AsyncClient, owner_headers: dict, db_session: AsyncSession
) -> None:
    project = await create_project(db_session, OWNER_ID, budget=100.0)

    response = await client.put(
        f"/api/v1/projects/{project.id}",
        json={"budget": None, "start_date": ""},
        headers=owner_headers,
    )

    assert response.status_code == 200
    assert response.json()["budget"] is None
    assert response.json()["start_date"] is None


@pytest.mark.parametrize(
    "payload",
    [
        {"title": None},
        {"keywords": None},
        {"status": "ARCHIVED"},
        {"summary": "   "},
    ],
)
async def test_update_project_rejects_invalid_fields(
    client: AsyncClient, owner_headers: dict, owned_project: Project, payload: dict
) -> None:
    response = await client.put(
        f"/api/v1/projects/{owned_project.id}", json=payload, headers=owner_headers
    )

    assert response.status_code == 400


async def test_update_project_checks_merged_date_range(
    client: AsyncClient, owner_headers: dict, db_session: AsyncSession
) -> None:
    project = await create_project(db_session, OWNER_ID, start_date=date(2024, 6, 1))

    response = await client.put(
        f"/api/v1/projects/{project.id}",
        json={"end_date": "2024-01-01"},
        headers=owner_headers,
    )

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "end_date"


async def test_update_foreign_project_is_not_found(
    client: AsyncClient, other_headers: dict, owned_project: Project, engine: AsyncEngine
) -> None:
    response = await client.put(
        f"/api/v1/projects/{owned_project.id}",
        json={"title": "Hijacked"},
        headers=other_headers,
    )

    assert response.status_code == 404
    assert await count_rows(engine, Project, Project.title == "Hijacked") == 0


async def test_delete_project_cascades_to_dependents(
    client: AsyncClient,
    owner_headers: dict,
    db_session: AsyncSession,
    owned_project: Project,
    engine: AsyncEngine,
) -> None:
    product_type = await create_product_type(db_session)
    first = await create_product(db_session, owned_project, product_type)
    second = await create_product(db_session, owned_project, product_type)
    attachments = [
        AttachmentFactory.build(project_id=owned_project.id),
        AttachmentFactory.build(product_id=first.id),
        AttachmentFactory.build(product_id=second.id),
    ]
    db_session.add_all(attachments)
    await db_session.commit()

    response = await client.delete(f"/api/v1/projects/{owned_project.id}", headers=owner_headers)

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert await count_rows(engine, Product) == 0
    assert await count_rows(engine, Attachment) == 0
    for product in (first, second):
        got = await client.get(f"/api/v1/products/{product.id}", headers=owner_headers)
        assert got.status_code == 404

    again = await client.delete(f"/api/v1/projects/{owned_project.id}", headers=owner_headers)
    assert again.status_code == 404


async def test_delete_foreign_project_is_not_found(
    client: AsyncClient, other_headers: dict, owned_project: Project, engine: AsyncEngine
) -> None:
    response = await client.delete(f"/api/v1/projects/{owned_project.id}", headers=other_headers)

    assert response.status_code == 404
    assert await count_rows(engine, Project) == 1


async def test_malformed_project_id_is_bad_request(
    client: AsyncClient, owner_headers: dict
) -> None:
    response = await client.get("/api/v1/projects/not-a-uuid", headers=owner_headers)

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "project_id"
