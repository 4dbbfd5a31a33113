"""Application layer: interfaces, services, source adapters, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (record store, result cache).
"""

from app.application.interfaces import IRecordStore, ISearchCache
from app.application.search import SearchAggregator, build_adapters
from app.application.services import FuzzyMatcher, ScopeResolver
from app.application.use_cases.search import DeepSearchService

__all__ = [
    "DeepSearchService",
    "FuzzyMatcher",
    "IRecordStore",
    "ISearchCache",
    "ScopeResolver",
    "SearchAggregator",
    "build_adapters",
]
