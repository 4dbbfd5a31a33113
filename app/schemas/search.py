"""Search API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.application.dtos.search import SearchOutcome, SearchResult


class SearchResultResponse(BaseModel):
    """Single search hit (any record type)."""

    id: str
    type: str = Field(..., description="Content type (contact, password, page_content, ...)")
    title: str
    description: str | None = None
    organization_id: str
    organization_name: str | None = None
    category: str | None = None
    subtype: str | None = None
    relevance_score: float = Field(..., ge=0, le=100)
    matched_fields: list[str] = Field(default_factory=list)
    matched_text: str | None = None
    url: str
    metadata: dict[str, str] = Field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_result(cls, result: SearchResult) -> "SearchResultResponse":
        return cls(
            id=result.id,
            type=result.type.value,
            title=result.title,
            description=result.description,
            organization_id=result.organization_id,
            organization_name=result.organization_name,
            category=result.category,
            subtype=result.subtype,
            relevance_score=result.relevance_score,
            matched_fields=list(result.matched_fields),
            matched_text=result.matched_text,
            url=result.url,
            metadata=dict(result.metadata),
            created_at=result.created_at,
            updated_at=result.updated_at,
        )


class SearchResponse(BaseModel):
    """Deep search response: ranked hits plus partial-failure status."""

    results: list[SearchResultResponse]
    status: str = Field(default="ok", description="ok | partial_failure")
    failed_content_types: list[str] = Field(default_factory=list)
    from_cache: bool = False

    @classmethod
    def from_outcome(cls, outcome: SearchOutcome) -> "SearchResponse":
        return cls(
            results=[SearchResultResponse.from_result(r) for r in outcome.results],
            status=outcome.status.value,
            failed_content_types=[ct.value for ct in outcome.failed_content_types],
            from_cache=outcome.from_cache,
        )


class CacheInvalidateRequest(BaseModel):
    """Body for POST /search/cache/invalidate. No organization_id clears everything."""

    organization_id: str | None = Field(default=None, max_length=64)


class CacheInvalidateResponse(BaseModel):
    """Result of a cache invalidation."""

    status: str = "ok"
    organization_id: str | None = None
    removed: int | None = Field(default=None, description="Entries dropped (None when clearing all)")
