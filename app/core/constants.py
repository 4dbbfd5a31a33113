"""Core constants: cache key prefixes and shared literal values.

Single source of truth for cache key structure (DRY). Used by
infrastructure cache implementations.
"""

# Cache key prefixes (used as search:tenant:<id>:<digest> or search:global:<digest>)
CACHE_PREFIX_SEARCH = "search"
CACHE_SCOPE_GLOBAL = "global"
CACHE_SCOPE_TENANT = "tenant"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"
