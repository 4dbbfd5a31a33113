"""Search result caches and cache key utilities.

InMemorySearchCache is per process; RedisSearchCache is shared between
workers. Key format is in keys.py (DRY).
"""

from app.infrastructure.cache.keys import search_key, tenant_prefix
from app.infrastructure.cache.memory_cache import InMemorySearchCache, NoOpSearchCache
from app.infrastructure.cache.redis_cache import RedisSearchCache

__all__ = [
    "InMemorySearchCache",
    "NoOpSearchCache",
    "RedisSearchCache",
    "search_key",
    "tenant_prefix",
]
