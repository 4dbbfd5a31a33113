"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.search import SearchCacheKey, SearchResult


# Result cache interface
class ISearchCache(Protocol):
    """Protocol for the short-lived search result cache (DIP).

    Purely a performance optimization: implementations must be safe under
    concurrent use and flushing one must never change search semantics.
    """

    async def get(self, key: SearchCacheKey) -> list[SearchResult] | None:
        """Return cached ranked results for key, or None on miss/expiry."""

    async def put(self, key: SearchCacheKey, value: list[SearchResult]) -> None:
        """Store ranked results for key, overwriting any existing entry."""

    async def invalidate_organization(self, organization_id: str) -> int:
        """Drop entries that may contain the organization's records. Returns count dropped."""

    async def clear(self) -> None:
        """Drop every entry."""
