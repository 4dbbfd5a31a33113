"""API tests for GET /api/v1/search and cache invalidation."""

from datetime import UTC, datetime

from httpx import AsyncClient

from app.domain.enums import ContentType
from app.infrastructure.cache import InMemorySearchCache
from tests.fakes import FakeRecordStore


def seed(store: FakeRecordStore) -> None:
    for org, name in (("org-1", "Acme"), ("org-2", "Globex")):
        store.add(
            ContentType.SIDEBAR_ITEM,
            id=f"sb-{org}",
            organization_id=org,
            organization_name=name,
            item_name="Site Summary",
            slug="site-summary",
            parent_category="Overview",
        )
    store.add(
        ContentType.PASSWORD,
        id="pw-1",
        organization_id="org-1",
        name="Site router",
        username="admin",
        password_value="hunter2",
        category="Network",
    )


async def test_global_search(client: AsyncClient, record_store: FakeRecordStore) -> None:
    seed(record_store)
    response = await client.get("/api/v1/search", params={"q": "site summary"})
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["failed_content_types"] == []
    assert data["from_cache"] is False
    top = data["results"][0]
    assert top["type"] == "sidebar_item"
    assert top["url"] == "/organizations/org-1/site-summary"
    assert {r["organization_id"] for r in data["results"] if r["type"] == "sidebar_item"} == {"org-1", "org-2"}
    assert "hunter2" not in response.text


async def test_organization_scope(client: AsyncClient, record_store: FakeRecordStore) -> None:
    seed(record_store)
    response = await client.get(
        "/api/v1/search",
        params={"q": "site summary", "scope": "organization", "organization_id": "org-2"},
    )
    assert response.status_code == 200
    results = response.json()["results"]
    assert results
    assert all(r["organization_id"] == "org-2" for r in results)


async def test_type_and_category_filters(client: AsyncClient, record_store: FakeRecordStore) -> None:
    seed(record_store)
    response = await client.get(
        "/api/v1/search",
        params=[("q", "site"), ("types", "password"), ("types", "sidebar_item"), ("category", "network")],
    )
    assert response.status_code == 200
    assert [r["id"] for r in response.json()["results"]] == ["pw-1"]


async def test_second_request_from_cache(client: AsyncClient, record_store: FakeRecordStore) -> None:
    seed(record_store)
    first = await client.get("/api/v1/search", params={"q": "site summary"})
    second = await client.get("/api/v1/search", params={"q": "site summary"})
    assert second.json()["from_cache"] is True
    assert second.json()["results"] == first.json()["results"]


async def test_empty_query_is_400(client: AsyncClient, record_store: FakeRecordStore) -> None:
    response = await client.get("/api/v1/search", params={"q": "  ?? "})
    assert response.status_code == 400
    assert response.json()["error"] == "EMPTY_QUERY"
    assert record_store.queries == []


async def test_missing_organization_id_is_400(client: AsyncClient) -> None:
    response = await client.get("/api/v1/search", params={"q": "site", "scope": "organization"})
    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_SCOPE"


async def test_invalid_limit_is_400(client: AsyncClient) -> None:
    response = await client.get("/api/v1/search", params={"q": "site", "limit": 0})
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_unknown_type_is_422(client: AsyncClient) -> None:
    response = await client.get("/api/v1/search", params={"q": "site", "types": "spaceship"})
    assert response.status_code == 422


async def test_all_sources_down_is_503(client: AsyncClient, record_store: FakeRecordStore) -> None:
    record_store.fail_types = set(ContentType)
    response = await client.get("/api/v1/search", params={"q": "site"})
    assert response.status_code == 503
    body = response.json()
    assert body["error"] == "SEARCH_UNAVAILABLE"
    assert "contact" in body["details"]["failed_content_types"]


async def test_partial_failure_reported(client: AsyncClient, record_store: FakeRecordStore) -> None:
    seed(record_store)
    record_store.fail_types = {ContentType.PASSWORD}
    response = await client.get("/api/v1/search", params={"q": "site summary"})
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "partial_failure"
    assert data["failed_content_types"] == ["password"]


async def test_invalidate_organization(
    client: AsyncClient, record_store: FakeRecordStore, search_cache: InMemorySearchCache
) -> None:
    seed(record_store)
    await client.get("/api/v1/search", params={"q": "site", "scope": "organization", "organization_id": "org-1"})
    response = await client.post("/api/v1/search/cache/invalidate", json={"organization_id": "org-1"})
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "organization_id": "org-1", "removed": 1}
    assert len(search_cache) == 0


async def test_invalidate_all(client: AsyncClient, search_cache: InMemorySearchCache) -> None:
    await client.get("/api/v1/search", params={"q": "site"})
    response = await client.post("/api/v1/search/cache/invalidate")
    assert response.status_code == 200
    assert len(search_cache) == 0


async def test_invalidate_rejects_malformed_id(client: AsyncClient) -> None:
    response = await client.post("/api/v1/search/cache/invalidate", json={"organization_id": "org 1"})
    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_SCOPE"


async def test_naive_created_window_treated_as_utc(client: AsyncClient, record_store: FakeRecordStore) -> None:
    seed(record_store)
    record_store.add(
        ContentType.SIDEBAR_ITEM,
        id="sb-old",
        organization_id="org-1",
        organization_name="Acme",
        item_name="Site Summary Archive",
        slug="site-summary-archive",
        created_at=datetime(2020, 1, 1, tzinfo=UTC),
    )
    response = await client.get(
        "/api/v1/search",
        params={"q": "site summary", "created_from": "2024-01-01T00:00:00"},
    )
    assert response.status_code == 200
    ids = {r["id"] for r in response.json()["results"]}
    assert "sb-org-1" in ids
    assert "sb-old" not in ids
