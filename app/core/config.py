"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Search tunables (timeouts, thresholds, cache policy)
are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults. DATABASE_URL is only required when a request
    actually needs a SQL session (see app.infrastructure.persistence.database).
    """

    # App
    app_name: str = "deep-search"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (SQLAlchemy async, e.g. postgresql+asyncpg://...)
    database_url: str = ""
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # Deep search
    search_default_limit: int = 100
    search_max_limit: int = 200
    search_adapter_timeout_seconds: float = 2.0
    # Each adapter may return up to candidate_multiplier x limit rows for re-ranking.
    search_candidate_multiplier: int = 3
    search_fuzzy_floor: float = 0.55
    search_prefix_bonus: float = 0.5
    # Fuzzy storage pre-filter uses this many leading and trailing characters of each token.
    search_store_pattern_length: int = 3

    # Result cache: "memory" (per process), "redis" (shared) or "none"
    search_cache_backend: str = "memory"
    search_cache_ttl_seconds: int = 30
    search_cache_max_entries: int = 1024

    # Redis (used when search_cache_backend is "redis")
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_search_settings(self) -> "Settings":
        """Validate search tunables and cache backend.

        - Limits and multipliers must be positive; default limit <= max limit.
        - Thresholds must lie in [0, 1].
        - Cache backend must be one of memory, redis, none.
        """
        if self.search_default_limit < 1 or self.search_max_limit < 1:
            raise ValueError("search_default_limit and search_max_limit must be >= 1")
        if self.search_default_limit > self.search_max_limit:
            raise ValueError(
                "search_default_limit must not exceed search_max_limit "
                f"({self.search_default_limit} > {self.search_max_limit})"
            )
        if self.search_candidate_multiplier < 1:
            raise ValueError("search_candidate_multiplier must be >= 1")
        if self.search_adapter_timeout_seconds <= 0:
            raise ValueError("search_adapter_timeout_seconds must be > 0")
        for name in ("search_fuzzy_floor", "search_prefix_bonus"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got: {value!r}")
        if self.search_store_pattern_length < 1:
            raise ValueError("search_store_pattern_length must be >= 1")
        if self.search_cache_backend not in ("memory", "redis", "none"):
            raise ValueError(
                "search_cache_backend must be 'memory', 'redis' or 'none', "
                f"got: {self.search_cache_backend!r}"
            )
        if self.search_cache_ttl_seconds < 1 or self.search_cache_max_entries < 1:
            raise ValueError(
                "search_cache_ttl_seconds and search_cache_max_entries must be >= 1"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
