"""Search cache key builders. Single place for key format (DRY).

Keys look like search:tenant:<organization_id>:<digest> for organization
scope and search:global:<digest> for global scope, so one organization's
entries can be dropped by prefix.
"""

from __future__ import annotations

import hashlib
import json

from app.application.dtos.search import SearchCacheKey
from app.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_SEARCH,
    CACHE_SCOPE_GLOBAL,
    CACHE_SCOPE_TENANT,
)


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value contains CACHE_KEY_SEP.
    """
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def _digest(key: SearchCacheKey) -> str:
    """Stable digest of every request attribute that affects the result list."""
    filters = key.filters
    date_range = filters.date_range
    payload = {
        "q": key.normalized_query,
        "types": sorted(key.content_types),
        "fuzzy": key.fuzzy,
        "archived": key.include_archived,
        "sort": key.sort_by,
        "limit": key.limit,
        "orgs": sorted(filters.organization_ids),
        "categories": sorted(c.casefold() for c in filters.categories),
        "start": date_range.start.isoformat() if date_range and date_range.start else None,
        "end": date_range.end.isoformat() if date_range and date_range.end else None,
    }
    raw = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def tenant_prefix(organization_id: str) -> str:
    """Prefix shared by every key of one organization's scoped searches."""
    _validate_key_component(organization_id, "organization_id")
    return f"{CACHE_PREFIX_SEARCH}{CACHE_KEY_SEP}{CACHE_SCOPE_TENANT}{CACHE_KEY_SEP}{organization_id}{CACHE_KEY_SEP}"


def global_prefix() -> str:
    """Prefix shared by every global-scope key."""
    return f"{CACHE_PREFIX_SEARCH}{CACHE_KEY_SEP}{CACHE_SCOPE_GLOBAL}{CACHE_KEY_SEP}"


def search_prefix() -> str:
    """Prefix shared by every search cache key."""
    return f"{CACHE_PREFIX_SEARCH}{CACHE_KEY_SEP}"


def search_key(key: SearchCacheKey) -> str:
    """Cache key for one search request."""
    prefix = global_prefix() if key.tenant_id is None else tenant_prefix(key.tenant_id)
    return f"{prefix}{_digest(key)}"
