"""Source adapters, adapter registry and result aggregation."""

from app.application.search.adapters import ADAPTER_CLASSES
from app.application.search.base import RowScore, SourceAdapter
from app.application.search.ranking import AggregationResult, SearchAggregator, rank
from app.application.search.registry import build_adapters, register_adapters

__all__ = [
    "ADAPTER_CLASSES",
    "AggregationResult",
    "RowScore",
    "SearchAggregator",
    "SourceAdapter",
    "build_adapters",
    "rank",
    "register_adapters",
]
