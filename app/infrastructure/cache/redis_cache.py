"""Redis-backed search result cache shared by every worker process.

Results are stored as JSON with SETEX; organization invalidation uses
SCAN + batched UNLINK. Redis being down degrades to cache misses, never to
search errors. Key format is in app.infrastructure.cache.keys (DRY).
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import redis.asyncio as redis

from app.application.dtos.search import SearchCacheKey, SearchResult
from app.infrastructure.cache.keys import (
    global_prefix,
    search_key,
    search_prefix,
    tenant_prefix,
)

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

_UNLINK_CHUNK_SIZE = 500


class RedisSearchCache:
    """Async Redis search cache with TTL.

    Call connect() at startup and disconnect() at shutdown.
    """

    def __init__(
        self,
        settings: Settings,
        redis_client: redis.Redis | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            settings: Connection options and search_cache_ttl_seconds.
            redis_client: Optional Redis client for testing or DI; treated
                as connected.
        """
        self.settings = settings
        self.ttl_seconds = settings.search_cache_ttl_seconds
        self.redis = redis_client
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self.redis is not None:
            return
        password = self.settings.redis_password
        try:
            self.redis = redis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=password.get_secret_value() if password else None,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_keepalive=True,
            )
            await self.redis.ping()
            self._connected = True
            logger.info(
                "Redis search cache connected: %s:%s",
                self.settings.redis_host,
                self.settings.redis_port,
            )
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Search cache disabled.", e)
            self._connected = False
            self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis search cache disconnected")

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def get(self, key: SearchCacheKey) -> list[SearchResult] | None:
        if not self.is_available() or self.redis is None:
            return None
        storage_key = search_key(key)
        try:
            value = await self.redis.get(storage_key)
        except redis.RedisError as e:
            logger.warning("Search cache get failed for %s: %s", storage_key, e)
            return None
        if value is None:
            logger.debug("Cache MISS: %s", storage_key)
            return None
        logger.debug("Cache HIT: %s", storage_key)
        try:
            return [SearchResult.from_dict(item) for item in json.loads(value)]
        except (ValueError, KeyError, TypeError):
            logger.exception("Discarding undecodable search cache entry %s", storage_key)
            return None

    async def put(self, key: SearchCacheKey, value: list[SearchResult]) -> None:
        if not self.is_available() or self.redis is None:
            return
        storage_key = search_key(key)
        serialized = json.dumps([result.to_dict() for result in value])
        try:
            await self.redis.setex(storage_key, self.ttl_seconds, serialized)
            logger.debug("Cache SET: %s (TTL: %ss)", storage_key, self.ttl_seconds)
        except redis.RedisError as e:
            logger.warning("Search cache set failed for %s: %s", storage_key, e)

    async def _delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching pattern using SCAN + batched UNLINK."""
        if not self.is_available() or self.redis is None:
            return 0
        deleted = 0
        try:
            chunk: list[str] = []
            async for key in self.redis.scan_iter(match=pattern):
                chunk.append(key)
                if len(chunk) >= _UNLINK_CHUNK_SIZE:
                    deleted += int(await self.redis.unlink(*chunk) or 0)
                    chunk = []
            if chunk:
                deleted += int(await self.redis.unlink(*chunk) or 0)
        except redis.RedisError as e:
            logger.warning("Search cache invalidation failed for %s: %s", pattern, e)
            return deleted
        if deleted > 0:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
        return deleted

    async def invalidate_organization(self, organization_id: str) -> int:
        removed = await self._delete_pattern(f"{tenant_prefix(organization_id)}*")
        removed += await self._delete_pattern(f"{global_prefix()}*")
        return removed

    async def clear(self) -> None:
        await self._delete_pattern(f"{search_prefix()}*")
