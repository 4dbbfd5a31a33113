"""Search API: deep search across every record type, plus cache invalidation."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.v1.dependencies import get_deep_search_service, get_search_cache
from app.application.dtos.search import DateRange, SearchFilters, SearchRequest
from app.application.interfaces import ISearchCache
from app.application.use_cases.search import DeepSearchService
from app.domain.enums import ContentType, SearchScope, SortOrder
from app.domain.exceptions import InvalidScopeException
from app.domain.value_objects import is_valid_organization_id
from app.schemas.search import (
    CacheInvalidateRequest,
    CacheInvalidateResponse,
    SearchResponse,
)

router = APIRouter()


@router.get("", response_model=SearchResponse)
async def deep_search(
    search_svc: Annotated[DeepSearchService, Depends(get_deep_search_service)],
    q: str = Query(..., max_length=500, description="Free-text query"),
    scope: SearchScope = Query(SearchScope.GLOBAL, description="global | organization"),
    organization_id: str | None = Query(None, max_length=64),
    types: list[ContentType] = Query(default=[], description="Restrict to these content types"),
    limit: int | None = Query(None, description="Max results (default 100, capped at 200)"),
    fuzzy: bool = Query(True, description="False for exact substring matching"),
    sort_by: SortOrder = Query(SortOrder.RELEVANCE),
    category: list[str] = Query(default=[], description="Keep only these categories"),
    organization_ids: list[str] = Query(default=[], description="Keep only these organizations"),
    created_from: datetime | None = Query(None),
    created_to: datetime | None = Query(None),
    include_archived: bool = Query(False),
) -> SearchResponse:
    """Search records across the selected scope, ranked by relevance."""
    date_range = None
    if created_from is not None or created_to is not None:
        date_range = DateRange(start=created_from, end=created_to)
    request = SearchRequest(
        query=q,
        scope=scope,
        organization_id=organization_id,
        content_types=frozenset(types),
        limit=limit,
        fuzzy=fuzzy,
        filters=SearchFilters(
            organization_ids=frozenset(organization_ids),
            categories=frozenset(category),
            date_range=date_range,
        ),
        include_archived=include_archived,
        sort_by=sort_by,
    )
    outcome = await search_svc.perform_deep_search(request)
    return SearchResponse.from_outcome(outcome)


@router.post("/cache/invalidate", response_model=CacheInvalidateResponse)
async def invalidate_search_cache(
    cache: Annotated[ISearchCache, Depends(get_search_cache)],
    body: CacheInvalidateRequest | None = None,
) -> CacheInvalidateResponse:
    """Drop cached results for one organization, or all cached results when no id is given."""
    organization_id = body.organization_id if body else None
    if organization_id is None:
        await cache.clear()
        return CacheInvalidateResponse()
    if not is_valid_organization_id(organization_id):
        raise InvalidScopeException("organization_id has an invalid format", organization_id=organization_id)
    removed = await cache.invalidate_organization(organization_id)
    return CacheInvalidateResponse(organization_id=organization_id, removed=removed)
