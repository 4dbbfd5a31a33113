"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the record store, the result cache and the
deep search service. Routes depend only on these dependencies, not on
infrastructure directly.
"""

from app.api.v1.dependencies.search import (
    get_deep_search_service,
    get_record_store,
    get_search_cache,
)

__all__ = [
    "get_deep_search_service",
    "get_record_store",
    "get_search_cache",
]
