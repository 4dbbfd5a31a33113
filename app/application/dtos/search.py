"""DTOs for deep search (no dependency on ORM).

SearchResult is the single shape every source adapter emits; the aggregator
and cache only ever handle this projection.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.domain.enums import ContentType, SearchScope, SearchStatus, SortOrder
from app.shared.utils.datetime import ensure_utc


@dataclass(frozen=True)
class DateRange:
    """Inclusive created_at window applied after ranking.

    Naive bounds are taken as UTC so they compare with stored timestamps.
    """

    start: datetime | None = None
    end: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", ensure_utc(self.start))
        object.__setattr__(self, "end", ensure_utc(self.end))


@dataclass(frozen=True)
class SearchFilters:
    """Post-ranking narrowing (organization ids, categories, created_at window).

    Empty collections mean "no constraint". Content types are not here: they
    select adapters up front (see SearchRequest.content_types).
    """

    organization_ids: frozenset[str] = frozenset()
    categories: frozenset[str] = frozenset()
    date_range: DateRange | None = None

    @property
    def is_empty(self) -> bool:
        return not self.organization_ids and not self.categories and self.date_range is None


@dataclass(frozen=True)
class SearchRequest:
    """Input for DeepSearchService.perform_deep_search (constructed per call)."""

    query: str
    scope: SearchScope = SearchScope.GLOBAL
    organization_id: str | None = None
    content_types: frozenset[ContentType] = frozenset()
    limit: int | None = None  # None = settings.search_default_limit
    fuzzy: bool = True
    filters: SearchFilters = field(default_factory=SearchFilters)
    include_archived: bool = False
    sort_by: SortOrder = SortOrder.RELEVANCE


@dataclass(frozen=True)
class SearchResult:
    """Unified search hit across all record types (read-model)."""

    id: str
    type: ContentType
    title: str
    organization_id: str
    url: str
    relevance_score: float
    matched_fields: tuple[str, ...] = ()
    description: str | None = None
    organization_name: str | None = None
    category: str | None = None
    subtype: str | None = None
    matched_text: str | None = None
    metadata: Mapping[str, str] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict (datetimes as ISO 8601)."""
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "organization_id": self.organization_id,
            "url": self.url,
            "relevance_score": self.relevance_score,
            "matched_fields": list(self.matched_fields),
            "description": self.description,
            "organization_name": self.organization_name,
            "category": self.category,
            "subtype": self.subtype,
            "matched_text": self.matched_text,
            "metadata": dict(self.metadata),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SearchResult":
        """Rebuild a SearchResult from to_dict() output."""
        created_at = data.get("created_at")
        updated_at = data.get("updated_at")
        return cls(
            id=data["id"],
            type=ContentType(data["type"]),
            title=data["title"],
            organization_id=data["organization_id"],
            url=data["url"],
            relevance_score=float(data["relevance_score"]),
            matched_fields=tuple(data.get("matched_fields") or ()),
            description=data.get("description"),
            organization_name=data.get("organization_name"),
            category=data.get("category"),
            subtype=data.get("subtype"),
            matched_text=data.get("matched_text"),
            metadata=dict(data.get("metadata") or {}),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
            updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
        )


@dataclass(frozen=True)
class SearchOutcome:
    """Ranked results plus the partial-failure indicator."""

    results: tuple[SearchResult, ...]
    status: SearchStatus = SearchStatus.OK
    failed_content_types: tuple[ContentType, ...] = ()
    from_cache: bool = False

    @property
    def is_partial(self) -> bool:
        return self.status is SearchStatus.PARTIAL_FAILURE


@dataclass(frozen=True)
class RecordQuery:
    """Storage-level request built by a source adapter.

    tenant_id is the hard tenant constraint (None = all organizations).
    Rows match when any of search_fields contains any of patterns
    (case-insensitive substring). columns lists every field to return.
    """

    content_type: ContentType
    tenant_id: str | None
    columns: tuple[str, ...]
    search_fields: tuple[str, ...]
    patterns: tuple[str, ...]
    limit: int
    include_archived: bool = False
    # Whole query tokens; rows containing one are returned ahead of rows that
    # only match a pattern fragment, before the limit applies.
    priority_patterns: tuple[str, ...] = ()


@dataclass(frozen=True)
class SearchCacheKey:
    """Everything that can change a ranked result list for one request.

    Built by the search facade after normalization; cache implementations
    turn it into a storage key (see app.infrastructure.cache.keys).
    """

    normalized_query: str
    tenant_id: str | None
    content_types: tuple[str, ...]
    fuzzy: bool
    include_archived: bool
    sort_by: str
    limit: int
    filters: SearchFilters = field(default_factory=SearchFilters)
