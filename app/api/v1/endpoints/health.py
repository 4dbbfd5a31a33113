"""Health check endpoints. No dependencies; used for liveness and readiness probes."""

from fastapi import APIRouter

from app.core.config import get_settings
from app.infrastructure.persistence.database import is_configured
from app.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get("/ready", response_model=ReadinessResponse)
def readiness_check() -> ReadinessResponse:
    """Report which backing services are configured."""
    settings = get_settings()
    return ReadinessResponse(
        database_configured=is_configured(),
        cache_backend=settings.search_cache_backend,
    )
