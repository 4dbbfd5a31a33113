"""Pytest configuration and fixtures for deep search.

Uses app.main:create_app for HTTP tests with the record store dependency
overridden by an in-memory fake. All imports use app.*.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.api.v1.dependencies import get_record_store
from app.application.search import SearchAggregator, build_adapters
from app.application.use_cases.search import DeepSearchService
from app.infrastructure.cache import InMemorySearchCache
from app.main import create_app
from tests.fakes import FakeRecordStore


@pytest.fixture
def record_store() -> FakeRecordStore:
    """Empty fake record store; tests add rows per content type."""
    return FakeRecordStore()


@pytest.fixture
def search_cache() -> InMemorySearchCache:
    return InMemorySearchCache(ttl_seconds=30, max_entries=1024)


@pytest.fixture
def search_service(
    record_store: FakeRecordStore, search_cache: InMemorySearchCache
) -> DeepSearchService:
    """DeepSearchService over the fake store with default tunables."""
    aggregator = SearchAggregator(build_adapters(record_store), timeout_seconds=0.5)
    return DeepSearchService(aggregator=aggregator, cache=search_cache)


@pytest.fixture
def app(record_store: FakeRecordStore, search_cache: InMemorySearchCache) -> FastAPI:
    """FastAPI app with the record store overridden and an in-memory cache."""
    application = create_app()
    application.dependency_overrides[get_record_store] = lambda: record_store
    application.state.search_cache = search_cache
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
