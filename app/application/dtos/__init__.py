"""Application DTOs (no ORM dependency)."""

from app.application.dtos.search import (
    DateRange,
    RecordQuery,
    SearchCacheKey,
    SearchFilters,
    SearchOutcome,
    SearchRequest,
    SearchResult,
)

__all__ = [
    "DateRange",
    "RecordQuery",
    "SearchCacheKey",
    "SearchFilters",
    "SearchOutcome",
    "SearchRequest",
    "SearchResult",
]
