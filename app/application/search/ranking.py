"""Fan-out to source adapters, merge, filter and rank."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime

from app.application.dtos.search import SearchFilters, SearchResult
from app.application.search.base import SourceAdapter
from app.application.services.tokenizer import normalize_text
from app.domain.enums import ContentType, SortOrder
from app.domain.exceptions import SearchUnavailableException
from app.domain.value_objects import ResolvedScope
from app.shared.telemetry.tracing import TracedOperation

logger = logging.getLogger(__name__)

DEFAULT_ADAPTER_TIMEOUT_SECONDS = 2.0


@dataclass(frozen=True)
class AggregationResult:
    """Merged (unranked) adapter output plus the types that failed."""

    results: tuple[SearchResult, ...]
    failed: tuple[ContentType, ...] = ()


class SearchAggregator:
    """Runs the selected adapters concurrently and merges their results."""

    def __init__(
        self,
        adapters: Mapping[ContentType, SourceAdapter],
        timeout_seconds: float = DEFAULT_ADAPTER_TIMEOUT_SECONDS,
    ) -> None:
        self.adapters = adapters
        self.timeout_seconds = timeout_seconds

    def select(self, content_types: Iterable[ContentType]) -> list[SourceAdapter]:
        """Adapters for content_types in enum order (all when empty)."""
        wanted = set(content_types)
        return [
            self.adapters[ct]
            for ct in ContentType
            if ct in self.adapters and (not wanted or ct in wanted)
        ]

    async def _run(
        self,
        adapter: SourceAdapter,
        scope: ResolvedScope,
        tokens: Sequence[str],
        limit: int,
        fuzzy: bool,
        include_archived: bool,
    ) -> list[SearchResult]:
        with TracedOperation(
            "search.adapter",
            {"search.content_type": adapter.content_type.value, "search.tenant": scope.tenant_id or "global"},
        ) as span:
            results = await asyncio.wait_for(
                adapter.fetch_candidates(
                    scope,
                    tokens,
                    limit,
                    fuzzy=fuzzy,
                    include_archived=include_archived,
                ),
                timeout=self.timeout_seconds,
            )
            span.set_attribute("search.result_count", len(results))
            return results

    async def aggregate(
        self,
        scope: ResolvedScope,
        tokens: Sequence[str],
        content_types: Iterable[ContentType],
        limit: int,
        *,
        fuzzy: bool = True,
        include_archived: bool = False,
    ) -> AggregationResult:
        """Fetch candidates from every selected adapter.

        A timed-out or failing adapter contributes nothing and is reported in
        AggregationResult.failed.

        Raises:
            SearchUnavailableException: If every selected adapter failed.
        """
        selected = self.select(content_types)
        if not selected:
            return AggregationResult(results=())
        outcomes = await asyncio.gather(
            *(self._run(a, scope, tokens, limit, fuzzy, include_archived) for a in selected),
            return_exceptions=True,
        )
        merged: list[SearchResult] = []
        failed: list[ContentType] = []
        for adapter, outcome in zip(selected, outcomes, strict=True):
            content_type = adapter.content_type
            if isinstance(outcome, asyncio.TimeoutError):
                logger.warning(
                    "Search adapter %s timed out after %.2fs",
                    content_type.value,
                    self.timeout_seconds,
                )
                failed.append(content_type)
            elif isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                logger.error(
                    "Search adapter %s failed: %s",
                    content_type.value,
                    outcome,
                    exc_info=outcome,
                )
                failed.append(content_type)
            else:
                merged.extend(self._within_tenant(scope, content_type, outcome))
        if len(failed) == len(selected):
            raise SearchUnavailableException([ct.value for ct in failed])
        return AggregationResult(results=tuple(merged), failed=tuple(failed))

    @staticmethod
    def _within_tenant(
        scope: ResolvedScope, content_type: ContentType, results: list[SearchResult]
    ) -> list[SearchResult]:
        if scope.is_global:
            return results
        kept = [r for r in results if r.organization_id == scope.tenant_id]
        if len(kept) != len(results):
            logger.error(
                "Adapter %s returned %d results outside tenant %s; dropped",
                content_type.value,
                len(results) - len(kept),
                scope.tenant_id,
            )
        return kept


def _timestamp(value: datetime | None) -> float:
    return value.timestamp() if value is not None else float("-inf")


def _passes_filters(result: SearchResult, filters: SearchFilters) -> bool:
    if filters.organization_ids and result.organization_id not in filters.organization_ids:
        return False
    if filters.categories:
        wanted = {c.casefold() for c in filters.categories}
        if result.category is None or result.category.casefold() not in wanted:
            return False
    date_range = filters.date_range
    if date_range is not None and result.created_at is not None:
        if date_range.start is not None and result.created_at < date_range.start:
            return False
        if date_range.end is not None and result.created_at > date_range.end:
            return False
    return True


def rank(
    results: Iterable[SearchResult],
    query_text: str,
    limit: int,
    filters: SearchFilters | None = None,
    sort_by: SortOrder = SortOrder.RELEVANCE,
) -> list[SearchResult]:
    """Filter, order and truncate merged results.

    Relevance order: relevance_score desc, titles containing the whole
    normalized query first, updated_at desc (missing last), title, then
    (type, id). DATE and NAME orders put their key first and fall back to
    relevance order.

    Args:
        results: Merged adapter output.
        query_text: Normalized query (tokens joined by spaces).
        limit: Maximum results returned.
        filters: Post-ranking filters; None means no filtering.
        sort_by: Primary ordering.

    Returns:
        At most limit results.
    """
    kept = [r for r in results if filters is None or _passes_filters(r, filters)]

    def relevance_key(r: SearchResult) -> tuple:
        title_hit = bool(query_text) and query_text in normalize_text(r.title)
        return (
            -r.relevance_score,
            not title_hit,
            -_timestamp(r.updated_at),
            r.title,
            r.type.value,
            r.id,
        )

    def date_key(r: SearchResult) -> tuple:
        return (-_timestamp(r.updated_at or r.created_at), relevance_key(r))

    def name_key(r: SearchResult) -> tuple:
        return (r.title.casefold(), relevance_key(r))

    keys = {SortOrder.DATE: date_key, SortOrder.NAME: name_key}
    kept.sort(key=keys.get(sort_by, relevance_key))
    return kept[: max(0, limit)]
