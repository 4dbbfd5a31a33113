"""Pydantic request/response schemas for the API."""

from app.schemas.health import HealthResponse, ReadinessResponse
from app.schemas.search import (
    CacheInvalidateRequest,
    CacheInvalidateResponse,
    SearchResponse,
    SearchResultResponse,
)

__all__ = [
    "CacheInvalidateRequest",
    "CacheInvalidateResponse",
    "HealthResponse",
    "ReadinessResponse",
    "SearchResponse",
    "SearchResultResponse",
]
