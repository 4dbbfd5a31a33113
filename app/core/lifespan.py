"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (result cache,
DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.application.interfaces import ISearchCache
from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


async def build_search_cache(settings: Settings) -> ISearchCache:
    """Create the result cache selected by search_cache_backend."""
    from app.infrastructure.cache import (
        InMemorySearchCache,
        NoOpSearchCache,
        RedisSearchCache,
    )

    if settings.search_cache_backend == "redis":
        cache = RedisSearchCache(settings)
        await cache.connect()
        return cache
    if settings.search_cache_backend == "none":
        return NoOpSearchCache()
    return InMemorySearchCache(
        ttl_seconds=settings.search_cache_ttl_seconds,
        max_entries=settings.search_cache_max_entries,
    )


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: result cache (memory, Redis or none). Shutdown order: cache
    disconnect, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    app.state.search_cache = await build_search_cache(settings)
    logger.info("Search cache backend: %s", settings.search_cache_backend)

    yield

    # ---- Shutdown ----
    cache = getattr(app.state, "search_cache", None)
    disconnect = getattr(cache, "disconnect", None)
    if disconnect is not None:
        await disconnect()
        logger.info("Cache disconnected")
    app.state.search_cache = None

    from app.infrastructure.persistence import database

    await database.dispose_engine()
