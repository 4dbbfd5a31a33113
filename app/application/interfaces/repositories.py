"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.search import RecordQuery


# Record store interface (storage collaborator for source adapters)
class IRecordStore(Protocol):
    """Protocol for the filtered text query capability of the record store.

    Implementations must apply query.tenant_id as a hard filter inside the
    storage query itself (never fetch-then-filter), honour query.limit, and
    return one dict per row holding every name in query.columns plus id,
    organization_id, organization_name, created_at and updated_at.
    Rows containing one of query.priority_patterns come first, then the most
    recently updated.
    Infrastructure failures (timeouts, connection errors) propagate.
    """

    async def fetch_records(self, query: RecordQuery) -> list[dict[str, Any]]:
        """Return at most query.limit rows matching query for the tenant."""
