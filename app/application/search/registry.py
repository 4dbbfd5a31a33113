"""Adapter registry: exactly one SourceAdapter per ContentType."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from app.application.interfaces.repositories import IRecordStore
from app.application.search.adapters import ADAPTER_CLASSES
from app.application.search.base import SourceAdapter
from app.application.services.fuzzy_matcher import FuzzyMatcher
from app.domain.enums import ContentType


def register_adapters(adapters: Iterable[SourceAdapter]) -> Mapping[ContentType, SourceAdapter]:
    """Index adapters by content type.

    Raises:
        ValueError: If a content type is registered twice or has no adapter.
    """
    registry: dict[ContentType, SourceAdapter] = {}
    for adapter in adapters:
        if adapter.content_type in registry:
            raise ValueError(f"Adapter registered twice for {adapter.content_type.value}")
        registry[adapter.content_type] = adapter
    missing = [ct.value for ct in ContentType if ct not in registry]
    if missing:
        raise ValueError(f"No adapter registered for: {', '.join(missing)}")
    return MappingProxyType(registry)


def build_adapters(
    store: IRecordStore,
    matcher: FuzzyMatcher | None = None,
    candidate_multiplier: int = 3,
    store_pattern_length: int = 3,
) -> Mapping[ContentType, SourceAdapter]:
    """Instantiate every built-in adapter over one record store."""
    matcher = matcher or FuzzyMatcher()
    return register_adapters(
        cls(
            store,
            matcher,
            candidate_multiplier=candidate_multiplier,
            store_pattern_length=store_pattern_length,
        )
        for cls in ADAPTER_CLASSES
    )
