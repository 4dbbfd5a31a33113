"""Deep search dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from app.application.interfaces import IRecordStore, ISearchCache
from app.application.search import SearchAggregator, build_adapters
from app.application.services import FuzzyMatcher, ScopeResolver
from app.application.use_cases.search import DeepSearchService
from app.core.config import get_settings
from app.infrastructure.cache import NoOpSearchCache
from app.infrastructure.persistence.database import get_session_factory
from app.infrastructure.persistence.repositories import SearchRecordRepository


async def get_record_store() -> IRecordStore:
    """SQL record store (one session per adapter query).

    Raises SqlNotConfiguredException when DATABASE_URL is not set.
    """
    return SearchRecordRepository(get_session_factory())


async def get_search_cache(request: Request) -> ISearchCache:
    """Result cache created at startup (see app.core.lifespan)."""
    cache = getattr(request.app.state, "search_cache", None)
    return cache if cache is not None else NoOpSearchCache()


async def get_deep_search_service(
    store: Annotated[IRecordStore, Depends(get_record_store)],
    cache: Annotated[ISearchCache, Depends(get_search_cache)],
) -> DeepSearchService:
    """Deep search use case wired from settings."""
    settings = get_settings()
    matcher = FuzzyMatcher(
        floor=settings.search_fuzzy_floor,
        prefix_bonus=settings.search_prefix_bonus,
    )
    adapters = build_adapters(
        store,
        matcher,
        candidate_multiplier=settings.search_candidate_multiplier,
        store_pattern_length=settings.search_store_pattern_length,
    )
    return DeepSearchService(
        aggregator=SearchAggregator(adapters, timeout_seconds=settings.search_adapter_timeout_seconds),
        cache=cache,
        scope_resolver=ScopeResolver(),
        default_limit=settings.search_default_limit,
        max_limit=settings.search_max_limit,
    )
