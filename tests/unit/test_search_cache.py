"""Tests for search cache keys, InMemorySearchCache and RedisSearchCache."""

import json
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
import redis.asyncio as redis

from app.application.dtos.search import DateRange, SearchCacheKey, SearchFilters, SearchResult
from app.core.config import Settings
from app.domain.enums import ContentType
from app.infrastructure.cache import InMemorySearchCache, NoOpSearchCache, RedisSearchCache, search_key
from app.infrastructure.cache.keys import tenant_prefix


def make_key(query: str = "network", tenant_id: str | None = "org-1", **overrides) -> SearchCacheKey:
    fields = {
        "normalized_query": query,
        "tenant_id": tenant_id,
        "content_types": (),
        "fuzzy": True,
        "include_archived": False,
        "sort_by": "relevance",
        "limit": 100,
    }
    fields.update(overrides)
    return SearchCacheKey(**fields)


def make_result(id: str = "c-1", organization_id: str = "org-1") -> SearchResult:
    return SearchResult(
        id=id,
        type=ContentType.CONTACT,
        title="John Smith",
        organization_id=organization_id,
        url=f"/organizations/{organization_id}/contacts",
        relevance_score=87.5,
        matched_fields=("name",),
        metadata={"email": "john@acme.test"},
        updated_at=datetime(2025, 1, 15, 12, 0, tzinfo=UTC),
    )


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestSearchKey:
    def test_tenant_and_global_prefixes(self) -> None:
        assert search_key(make_key(tenant_id="org-1")).startswith("search:tenant:org-1:")
        assert search_key(make_key(tenant_id=None)).startswith("search:global:")

    def test_deterministic(self) -> None:
        assert search_key(make_key()) == search_key(make_key())

    def test_every_request_attribute_changes_key(self) -> None:
        base = search_key(make_key())
        variants = [
            make_key(query="netwrk"),
            make_key(content_types=("document",)),
            make_key(fuzzy=False),
            make_key(include_archived=True),
            make_key(sort_by="date"),
            make_key(limit=10),
            make_key(filters=SearchFilters(categories=frozenset({"hr"}))),
            make_key(filters=SearchFilters(date_range=DateRange(start=datetime(2025, 1, 1, tzinfo=UTC)))),
        ]
        assert all(search_key(v) != base for v in variants)

    def test_separator_rejected_in_tenant(self) -> None:
        with pytest.raises(ValueError):
            tenant_prefix("org:1")


class TestInMemorySearchCache:
    async def test_put_then_get(self) -> None:
        cache = InMemorySearchCache()
        await cache.put(make_key(), [make_result()])
        assert await cache.get(make_key()) == [make_result()]
        assert await cache.get(make_key(query="other")) is None

    async def test_entries_expire(self) -> None:
        clock = FakeClock()
        cache = InMemorySearchCache(ttl_seconds=30, clock=clock)
        await cache.put(make_key(), [make_result()])
        clock.now += 29
        assert await cache.get(make_key()) is not None
        clock.now += 1
        assert await cache.get(make_key()) is None
        assert len(cache) == 0

    async def test_oldest_entry_evicted_first(self) -> None:
        cache = InMemorySearchCache(max_entries=2)
        await cache.put(make_key("a"), [])
        await cache.put(make_key("b"), [])
        await cache.put(make_key("c"), [])
        assert await cache.get(make_key("a")) is None
        assert await cache.get(make_key("b")) == []
        assert await cache.get(make_key("c")) == []

    async def test_invalidate_organization(self) -> None:
        cache = InMemorySearchCache()
        await cache.put(make_key(tenant_id="org-1"), [make_result()])
        await cache.put(make_key(tenant_id="org-2"), [make_result(organization_id="org-2")])
        await cache.put(make_key(tenant_id=None), [make_result()])
        removed = await cache.invalidate_organization("org-1")
        assert removed == 2
        assert await cache.get(make_key(tenant_id="org-1")) is None
        assert await cache.get(make_key(tenant_id=None)) is None
        assert await cache.get(make_key(tenant_id="org-2")) is not None

    async def test_clear(self) -> None:
        cache = InMemorySearchCache()
        await cache.put(make_key(), [])
        await cache.clear()
        assert len(cache) == 0

    def test_invalid_policy(self) -> None:
        with pytest.raises(ValueError):
            InMemorySearchCache(ttl_seconds=0)


async def test_noop_cache_never_stores() -> None:
    cache = NoOpSearchCache()
    await cache.put(make_key(), [make_result()])
    assert await cache.get(make_key()) is None
    assert await cache.invalidate_organization("org-1") == 0


def async_iter(items: list[str]):
    async def gen(*args, **kwargs):
        for item in items:
            yield item

    return gen


class TestRedisSearchCache:
    @pytest.fixture
    def client(self) -> MagicMock:
        client = MagicMock()
        client.get = AsyncMock(return_value=None)
        client.setex = AsyncMock()
        client.unlink = AsyncMock(return_value=1)
        client.aclose = AsyncMock()
        return client

    @pytest.fixture
    def cache(self, client: MagicMock) -> RedisSearchCache:
        return RedisSearchCache(Settings(search_cache_ttl_seconds=30), redis_client=client)

    async def test_put_serializes_with_ttl(self, cache: RedisSearchCache, client: MagicMock) -> None:
        await cache.put(make_key(), [make_result()])
        key, ttl, payload = client.setex.await_args.args
        assert key == search_key(make_key())
        assert ttl == 30
        assert json.loads(payload)[0]["id"] == "c-1"

    async def test_get_round_trips_results(self, cache: RedisSearchCache, client: MagicMock) -> None:
        client.get.return_value = json.dumps([make_result().to_dict()])
        assert await cache.get(make_key()) == [make_result()]

    async def test_miss(self, cache: RedisSearchCache) -> None:
        assert await cache.get(make_key()) is None

    async def test_redis_errors_degrade_to_miss(self, cache: RedisSearchCache, client: MagicMock) -> None:
        client.get.side_effect = redis.ConnectionError("down")
        client.setex.side_effect = redis.ConnectionError("down")
        assert await cache.get(make_key()) is None
        await cache.put(make_key(), [make_result()])

    async def test_corrupt_entry_is_a_miss(self, cache: RedisSearchCache, client: MagicMock) -> None:
        client.get.return_value = "not json"
        assert await cache.get(make_key()) is None

    async def test_invalidate_organization_scans_tenant_and_global(
        self, cache: RedisSearchCache, client: MagicMock
    ) -> None:
        client.scan_iter = MagicMock(side_effect=[async_iter(["k1", "k2"])(), async_iter(["g1"])()])
        client.unlink = AsyncMock(side_effect=[2, 1])
        assert await cache.invalidate_organization("org-1") == 3
        patterns = [c.kwargs["match"] for c in client.scan_iter.call_args_list]
        assert patterns == ["search:tenant:org-1:*", "search:global:*"]

    async def test_unavailable_cache_is_inert(self) -> None:
        cache = RedisSearchCache(Settings())
        assert not cache.is_available()
        assert await cache.get(make_key()) is None
        assert await cache.invalidate_organization("org-1") == 0

    async def test_disconnect(self, cache: RedisSearchCache, client: MagicMock) -> None:
        await cache.disconnect()
        client.aclose.assert_awaited_once()
        assert not cache.is_available()
