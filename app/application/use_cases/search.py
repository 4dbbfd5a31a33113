"""Deep search use case: normalize, resolve scope, cache, aggregate, rank."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.application.dtos.search import SearchCacheKey, SearchOutcome, SearchRequest
from app.application.search.ranking import rank
from app.application.services.scope_resolver import ScopeResolver
from app.application.services.tokenizer import normalize
from app.domain.enums import SearchStatus
from app.domain.exceptions import EmptyQueryException, ValidationException
from app.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from app.application.interfaces.services import ISearchCache
    from app.application.search.ranking import SearchAggregator

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100
MAX_LIMIT = 200


class DeepSearchService:
    """Single entry point for searching across every record type.

    Tenant isolation is enforced by the scope resolver and pushed into each
    adapter's store query; the aggregator re-checks it on the way out.
    """

    def __init__(
        self,
        aggregator: SearchAggregator,
        cache: ISearchCache,
        scope_resolver: ScopeResolver | None = None,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ) -> None:
        self.aggregator = aggregator
        self.cache = cache
        self.scope_resolver = scope_resolver or ScopeResolver()
        self.default_limit = default_limit
        self.max_limit = max_limit

    def _effective_limit(self, limit: int | None) -> int:
        if limit is None:
            return self.default_limit
        if limit < 1:
            raise ValidationException("limit must be a positive integer", field="limit")
        return min(limit, self.max_limit)

    @traced("search.perform_deep_search")
    async def perform_deep_search(self, request: SearchRequest) -> SearchOutcome:
        """Search every selected record type and return ranked results.

        Args:
            request: Query, scope, type filter, limit and options.

        Returns:
            SearchOutcome with at most the effective limit of results. status is
            PARTIAL_FAILURE when some adapters failed; such outcomes are not cached.

        Raises:
            EmptyQueryException: If the query normalizes to no tokens.
            InvalidScopeException: If organization scope lacks a valid id.
            ValidationException: If limit is not positive.
            SearchUnavailableException: If every selected adapter failed.
        """
        tokens = normalize(request.query)
        if not tokens:
            raise EmptyQueryException()
        scope = self.scope_resolver.resolve(request.scope, request.organization_id)
        limit = self._effective_limit(request.limit)
        query_text = " ".join(tokens)
        add_span_attributes(
            **{
                "search.scope": request.scope.value,
                "search.limit": limit,
                "search.fuzzy": request.fuzzy,
                "search.token_count": len(tokens),
            }
        )

        key = SearchCacheKey(
            normalized_query=query_text,
            tenant_id=scope.tenant_id,
            content_types=tuple(sorted(ct.value for ct in request.content_types)),
            fuzzy=request.fuzzy,
            include_archived=request.include_archived,
            sort_by=request.sort_by.value,
            limit=limit,
            filters=request.filters,
        )
        cached = await self.cache.get(key)
        if cached is not None:
            logger.debug("Search cache hit for tenant=%s", scope.tenant_id)
            return SearchOutcome(results=tuple(cached), from_cache=True)

        aggregation = await self.aggregator.aggregate(
            scope,
            tokens,
            request.content_types,
            limit,
            fuzzy=request.fuzzy,
            include_archived=request.include_archived,
        )
        results = rank(
            aggregation.results,
            query_text,
            limit,
            filters=request.filters,
            sort_by=request.sort_by,
        )
        if aggregation.failed:
            logger.warning(
                "Partial search failure (tenant=%s, failed=%s)",
                scope.tenant_id,
                ",".join(ct.value for ct in aggregation.failed),
            )
            return SearchOutcome(
                results=tuple(results),
                status=SearchStatus.PARTIAL_FAILURE,
                failed_content_types=aggregation.failed,
            )
        await self.cache.put(key, results)
        return SearchOutcome(results=tuple(results))

    async def invalidate_organization(self, organization_id: str) -> int:
        """Drop cached results that may include organization_id's records."""
        removed = await self.cache.invalidate_organization(organization_id)
        logger.info("Invalidated %d search cache entries for organization %s", removed, organization_id)
        return removed

    async def clear_cache(self) -> None:
        await self.cache.clear()
        logger.info("Search cache cleared")
