"""Owner-scoped product endpoints and cross-entity checks."""

from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from src.nexus.models import Product, ProductType, Project
from tests.helpers import (
    OTHER_USER_ID,
    OWNER_ID,
    count_rows,
    create_product,
    create_product_type,
    create_project,
)

pytestmark = pytest.mark.integration


def product_payload(project: Project, product_type: ProductType, **overrides) -> dict:
    return {
        "title": "Prototype",
        "summary": "Working prototype",
        "product_type_id": str(product_type.id),
        "project_id": str(project.id),
        **overrides,
    }


async def test_create_product(
    client: AsyncClient,
    owner_headers: dict,
    owned_project: Project,
    product_type: ProductType,
) -> None:
    response = await client.post(
        "/api/v1/products",
        json=product_payload(
            owned_project, product_type, product_url="https://example.org/demo", is_public=True
        ),
        headers=owner_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["owner_id"] == OWNER_ID
    assert data["project"]["id"] == str(owned_project.id)
    assert data["product_type"]["id"] == str(product_type.id)
    assert data["product_url"] == "https://example.org/demo"
    assert data["is_public"] is True
    assert data["attachments"] == []


async def test_create_product_under_foreign_project_writes_nothing(
    client: AsyncClient,
    other_headers: dict,
    owned_project: Project,
    product_type: ProductType,
    engine: AsyncEngine,
) -> None:
    response = await client.post(
        "/api/v1/products",
        json=product_payload(owned_project, product_type),
        headers=other_headers,
    )

    assert response.status_code == 404
    assert response.json()["error"] == "Project not found or unauthorized"
    assert await count_rows(engine, Product) == 0


async def test_create_product_with_unknown_type(
    client: AsyncClient, owner_headers: dict, owned_project: Project, engine: AsyncEngine
) -> None:
    payload = {
        "title": "Prototype",
        "summary": "Working prototype",
        "product_type_id": str(uuid4()),
        "project_id": str(owned_project.id),
    }
    response = await client.post("/api/v1/products", json=payload, headers=owner_headers)

    assert response.status_code == 404
    assert response.json()["error"] == "Product type not found"
    assert await count_rows(engine, Product) == 0


@pytest.mark.parametrize(
    ("override", "field"),
    [
        ({"title": " "}, "title"),
        ({"summary": ""}, "summary"),
        ({"product_url": "ftp://example.org/file"}, "product_url"),
        ({"product_url": "not a url"}, "product_url"),
        ({"product_type_id": "nope"}, "product_type_id"),
    ],
)
async def test_create_product_validation(
    client: AsyncClient,
    owner_headers: dict,
    owned_project: Project,
    product_type: ProductType,
    override: dict,
    field: str,
) -> None:
    response = await client.post(
        "/api/v1/products",
        json=product_payload(owned_project, product_type, **override),
        headers=owner_headers,
    )

    assert response.status_code == 400
    assert any(detail["field"] == field for detail in response.json()["details"])


async def test_blank_product_url_is_treated_as_absent(
    client: AsyncClient,
    owner_headers: dict,
    owned_project: Project,
    product_type: ProductType,
) -> None:
    response = await client.post(
        "/api/v1/products",
        json=product_payload(owned_project, product_type, product_url="  "),
        headers=owner_headers,
    )

    assert response.status_code == 201
    assert response.json()["product_url"] is None


async def test_list_products_filtered_by_project(
    client: AsyncClient,
    owner_headers: dict,
    db_session: AsyncSession,
    product_type: ProductType,
) -> None:
    first = await create_project(db_session, OWNER_ID)
    second = await create_project(db_session, OWNER_ID)
    foreign = await create_project(db_session, OTHER_USER_ID)
    await create_product(db_session, first, product_type)
    await create_product(db_session, second, product_type)
    await create_product(db_session, foreign, product_type)

    everything = await client.get("/api/v1/products", headers=owner_headers)
    only_first = await client.get(
        "/api/v1/products", params={"project_id": str(first.id)}, headers=owner_headers
    )

    assert everything.json()["total"] == 2
    assert only_first.json()["total"] == 1
    assert only_first.json()["products"][0]["project_id"] == str(first.id)


async def test_get_product_only_for_owner(
    client: AsyncClient,
    owner_headers: dict,
    other_headers: dict,
    db_session: AsyncSession,
    owned_project: Project,
    product_type: ProductType,
) -> None:
    product = await create_product(db_session, owned_project, product_type)

    own = await client.get(f"/api/v1/products/{product.id}", headers=owner_headers)
    foreign = await client.get(f"/api/v1/products/{product.id}", headers=other_headers)

    assert own.status_code == 200
    assert own.json()["project"]["title"] == owned_project.title
    assert foreign.status_code == 404


async def test_update_product_type_must_exist(
    client: AsyncClient,
    owner_headers: dict,
    db_session: AsyncSession,
    owned_project: Project,
    product_type: ProductType,
) -> None:
    product = await create_product(db_session, owned_project, product_type)
    other_type = await create_product_type(db_session)

    missing = await client.put(
        f"/api/v1/products/{product.id}",
        json={"product_type_id": str(uuid4())},
        headers=owner_headers,
    )
    changed = await client.put(
        f"/api/v1/products/{product.id}",
        json={"product_type_id": str(other_type.id), "title": "Renamed"},
        headers=owner_headers,
    )

    assert missing.status_code == 404
    assert changed.status_code == 200
    assert changed.json()["product_type"]["code"] == other_type.code
    assert changed.json()["title"] == "Renamed"


async def test_move_product_between_own_projects(
    client: AsyncClient,
    owner_headers: dict,
    db_session: AsyncSession,
    owned_project: Project,
    product_type: ProductType,
) -> None:
    product = await create_product(db_session, owned_project, product_type)
    target = await create_project(db_session, OWNER_ID)

    response = await client.put(
        f"/api/v1/products/{product.id}",
        json={"project_id": str(target.id)},
        headers=owner_headers,
    )

    assert response.status_code == 200
    assert response.json()["project"]["id"] == str(target.id)


async def test_move_product_into_foreign_project_is_rejected(
    client: AsyncClient,
    owner_headers: dict,
    db_session: AsyncSession,
    owned_project: Project,
    product_type: ProductType,
    engine: AsyncEngine,
) -> None:
    product = await create_product(db_session, owned_project, product_type)
    foreign = await create_project(db_session, OTHER_USER_ID)

    response = await client.put(
        f"/api/v1/products/{product.id}",
        json={"project_id": str(foreign.id)},
        headers=owner_headers,
    )

    assert response.status_code == 404
    assert await count_rows(engine, Product, Product.project_id == owned_project.id) == 1


async def test_update_product_rejects_null_title(
    client: AsyncClient,
    owner_headers: dict,
    db_session: AsyncSession,
    owned_project: Project,
    product_type: ProductType,
) -> None:
    product = await create_product(db_session, owned_project, product_type)

    response = await client.put(
        f"/api/v1/products/{product.id}", json={"title": None}, headers=owner_headers
    )

    assert response.status_code == 400


async def test_delete_product(
    client: AsyncClient,
    owner_headers: dict,
    other_headers: dict,
    db_session: AsyncSession,
    owned_project: Project,
    product_type: ProductType,
    engine: AsyncEngine,
) -> None:
    product = await create_product(db_session, owned_project, product_type)

    foreign = await client.delete(f"/api/v1/products/{product.id}", headers=other_headers)
    own = await client.delete(f"/api/v1/products/{product.id}", headers=owner_headers)
    again = await client.delete(f"/api/v1/products/{product.id}", headers=owner_headers)

    assert foreign.status_code == 404
    assert own.status_code == 200
    assert again.status_code == 404
    assert await count_rows(engine, Product) == 0
    assert await count_rows(engine, Project) == 1
