"""Tests for DeepSearchService (scope isolation, caching, failures, limits)."""

from datetime import UTC, datetime

import pytest

from app.application.dtos.search import DateRange, SearchFilters, SearchRequest
from app.application.search import SearchAggregator, build_adapters
from app.application.use_cases.search import DeepSearchService
from app.domain.enums import ContentType, SearchScope, SearchStatus
from app.domain.exceptions import (
    EmptyQueryException,
    InvalidScopeException,
    SearchUnavailableException,
    ValidationException,
)
from app.infrastructure.cache import InMemorySearchCache, NoOpSearchCache
from tests.fakes import FakeRecordStore


def add_site_summaries(store: FakeRecordStore) -> None:
    for org in ("org-1", "org-2"):
        store.add(
            ContentType.SIDEBAR_ITEM,
            id=f"sb-{org}",
            organization_id=org,
            organization_name=org.upper(),
            item_name="Site Summary",
            slug="site-summary",
        )


class TestScenarios:
    async def test_organization_scope_isolates_tenant(
        self, search_service: DeepSearchService, record_store: FakeRecordStore
    ) -> None:
        add_site_summaries(record_store)
        outcome = await search_service.perform_deep_search(
            SearchRequest(query="site summary", scope=SearchScope.ORGANIZATION, organization_id="org-1")
        )
        assert [r.id for r in outcome.results] == ["sb-org-1"]
        assert all(q.tenant_id == "org-1" for q in record_store.queries)

    async def test_global_scope_spans_organizations(
        self, search_service: DeepSearchService, record_store: FakeRecordStore
    ) -> None:
        for org, name in (("org-1", "Acme"), ("org-2", "Globex"), ("org-3", "Initech")):
            record_store.add(
                ContentType.CONTACT,
                organization_id=org,
                organization_name=name,
                first_name="John",
                last_name="Smith",
            )
        outcome = await search_service.perform_deep_search(SearchRequest(query="john smith"))
        contacts = [r for r in outcome.results if r.type is ContentType.CONTACT]
        assert {(r.organization_id, r.organization_name) for r in contacts} == {
            ("org-1", "Acme"),
            ("org-2", "Globex"),
            ("org-3", "Initech"),
        }
        assert outcome.status is SearchStatus.OK

    @pytest.mark.parametrize("query", ["", "   ", "?!"])
    async def test_empty_query_invokes_no_adapter(
        self, search_service: DeepSearchService, record_store: FakeRecordStore, query: str
    ) -> None:
        with pytest.raises(EmptyQueryException):
            await search_service.perform_deep_search(SearchRequest(query=query))
        assert record_store.queries == []


class TestRequestValidation:
    async def test_organization_scope_without_id(self, search_service: DeepSearchService) -> None:
        with pytest.raises(InvalidScopeException):
            await search_service.perform_deep_search(
                SearchRequest(query="site", scope=SearchScope.ORGANIZATION)
            )

    @pytest.mark.parametrize("limit", [0, -5])
    async def test_non_positive_limit(self, search_service: DeepSearchService, limit: int) -> None:
        with pytest.raises(ValidationException):
            await search_service.perform_deep_search(SearchRequest(query="site", limit=limit))

    async def test_limit_defaults_and_caps(self, record_store: FakeRecordStore) -> None:
        service = DeepSearchService(
            SearchAggregator(build_adapters(record_store, candidate_multiplier=1)),
            NoOpSearchCache(),
            default_limit=5,
            max_limit=8,
        )
        for i in range(20):
            record_store.add(ContentType.DOCUMENT, organization_id="org-1", name=f"Runbook {i}")
        default = await service.perform_deep_search(SearchRequest(query="runbook"))
        capped = await service.perform_deep_search(SearchRequest(query="runbook", limit=500))
        assert len(default.results) == 5
        assert len(capped.results) == 8


class TestTypeFilter:
    async def test_only_requested_types(
        self, search_service: DeepSearchService, record_store: FakeRecordStore
    ) -> None:
        record_store.add(ContentType.DOCUMENT, organization_id="org-1", name="Network diagram")
        record_store.add(ContentType.ASSET, organization_id="org-1", name="Network switch")
        outcome = await search_service.perform_deep_search(
            SearchRequest(query="network", content_types=frozenset({ContentType.DOCUMENT}))
        )
        assert outcome.results
        assert all(r.type is ContentType.DOCUMENT for r in outcome.results)


class TestCaching:
    async def test_repeat_request_served_from_cache(
        self, search_service: DeepSearchService, record_store: FakeRecordStore
    ) -> None:
        add_site_summaries(record_store)
        request = SearchRequest(query="Site  Summary")
        first = await search_service.perform_deep_search(request)
        calls = len(record_store.queries)
        second = await search_service.perform_deep_search(SearchRequest(query="site summary"))
        assert second.from_cache
        assert not first.from_cache
        assert second.results == first.results
        assert len(record_store.queries) == calls

    async def test_invalidate_organization_forces_refetch(
        self, search_service: DeepSearchService, record_store: FakeRecordStore
    ) -> None:
        add_site_summaries(record_store)
        request = SearchRequest(query="site summary", scope=SearchScope.ORGANIZATION, organization_id="org-1")
        await search_service.perform_deep_search(request)
        assert await search_service.invalidate_organization("org-1") == 1
        again = await search_service.perform_deep_search(request)
        assert not again.from_cache

    async def test_partial_failure_not_cached(
        self,
        search_service: DeepSearchService,
        record_store: FakeRecordStore,
        search_cache: InMemorySearchCache,
    ) -> None:
        add_site_summaries(record_store)
        record_store.fail_types = {ContentType.CONTACT}
        outcome = await search_service.perform_deep_search(SearchRequest(query="site summary"))
        assert outcome.status is SearchStatus.PARTIAL_FAILURE
        assert outcome.is_partial
        assert outcome.failed_content_types == (ContentType.CONTACT,)
        assert {r.id for r in outcome.results} == {"sb-org-1", "sb-org-2"}
        assert len(search_cache) == 0


class TestFailures:
    async def test_timeout_is_partial_failure(
        self, search_service: DeepSearchService, record_store: FakeRecordStore
    ) -> None:
        add_site_summaries(record_store)
        record_store.slow_types = {ContentType.DOCUMENT}
        outcome = await search_service.perform_deep_search(SearchRequest(query="site summary"))
        assert outcome.failed_content_types == (ContentType.DOCUMENT,)
        assert len(outcome.results) == 2

    async def test_all_adapters_failing_raises(
        self, search_service: DeepSearchService, record_store: FakeRecordStore
    ) -> None:
        record_store.fail_types = {ContentType.DOCUMENT}
        with pytest.raises(SearchUnavailableException):
            await search_service.perform_deep_search(
                SearchRequest(query="runbook", content_types=frozenset({ContentType.DOCUMENT}))
            )

    async def test_clear_cache(self, search_service: DeepSearchService, search_cache: InMemorySearchCache) -> None:
        await search_service.perform_deep_search(SearchRequest(query="anything"))
        assert len(search_cache) == 1
        await search_service.clear_cache()
        assert len(search_cache) == 0


class TestDateFilter:
    async def test_naive_date_range_treated_as_utc(
        self, search_service: DeepSearchService, record_store: FakeRecordStore
    ) -> None:
        add_site_summaries(record_store)
        record_store.add(
            ContentType.SIDEBAR_ITEM,
            id="sb-old",
            organization_id="org-1",
            item_name="Site Summary Archive",
            slug="site-summary-archive",
            created_at=datetime(2020, 1, 1, tzinfo=UTC),
        )
        outcome = await search_service.perform_deep_search(
            SearchRequest(
                query="site summary",
                filters=SearchFilters(date_range=DateRange(start=datetime(2024, 1, 1))),
            )
        )
        ids = {r.id for r in outcome.results}
        assert ids == {"sb-org-1", "sb-org-2"}

    def test_naive_bounds_normalized(self) -> None:
        window = DateRange(start=datetime(2024, 1, 1), end=datetime(2024, 2, 1, 12))
        assert window.start == datetime(2024, 1, 1, tzinfo=UTC)
        assert window.end is not None and window.end.tzinfo is UTC
