"""In-process search result caches."""

from __future__ import annotations

import asyncio
import logging
import time
from collections import OrderedDict
from collections.abc import Callable

from app.application.dtos.search import SearchCacheKey, SearchResult
from app.infrastructure.cache.keys import global_prefix, search_key, tenant_prefix

logger = logging.getLogger(__name__)


class InMemorySearchCache:
    """Per-process TTL cache of ranked search results.

    Entries expire ttl_seconds after they were stored. When max_entries is
    reached the oldest entry is evicted first. All access goes through one
    asyncio.Lock.
    """

    def __init__(
        self,
        ttl_seconds: float = 30.0,
        max_entries: int = 1024,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0 or max_entries < 1:
            raise ValueError("ttl_seconds must be > 0 and max_entries >= 1")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, tuple[float, tuple[SearchResult, ...]]] = OrderedDict()
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: SearchCacheKey) -> list[SearchResult] | None:
        storage_key = search_key(key)
        async with self._lock:
            entry = self._entries.get(storage_key)
            if entry is None:
                return None
            created_at, results = entry
            if self._clock() - created_at >= self.ttl_seconds:
                del self._entries[storage_key]
                return None
            return list(results)

    async def put(self, key: SearchCacheKey, value: list[SearchResult]) -> None:
        storage_key = search_key(key)
        async with self._lock:
            self._entries.pop(storage_key, None)
            self._entries[storage_key] = (self._clock(), tuple(value))
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Search cache evicted %s", evicted)

    async def invalidate_organization(self, organization_id: str) -> int:
        prefixes = (tenant_prefix(organization_id), global_prefix())
        async with self._lock:
            stale = [k for k in self._entries if k.startswith(prefixes)]
            for k in stale:
                del self._entries[k]
        return len(stale)

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()


class NoOpSearchCache:
    """Cache that never stores anything (caching disabled)."""

    async def get(self, key: SearchCacheKey) -> list[SearchResult] | None:
        return None

    async def put(self, key: SearchCacheKey, value: list[SearchResult]) -> None:
        return None

    async def invalidate_organization(self, organization_id: str) -> int:
        return 0

    async def clear(self) -> None:
        return None
