"""Error responses for the search API.

Domain errors carry an error_code; this module maps each code to an HTTP
status. Every error body has the same shape:
``{"error": <code>, "message": <text>, "details": {...}}``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import DeepSearchException

logger = logging.getLogger(__name__)

# Client mistakes are 400, unavailable backends 503.
ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "EMPTY_QUERY": 400,
    "INVALID_SCOPE": 400,
    "SEARCH_UNAVAILABLE": 503,
    "SQL_NOT_CONFIGURED": 503,
}


def _deep_search_exception_handler(request: Request, exc: DeepSearchException) -> JSONResponse:
    status = ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status >= 500:
        logger.warning("%s on %s: %s", exc.error_code, request.url.path, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed parameters (unknown content type, bad date) are 422."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": {"errors": _jsonable_errors(exc)},
        },
    )


def _jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Validation errors without the raw input and ctx objects (not always JSON-safe)."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": str(exc.detail), "details": {}},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Unexpected failure: 500, with the exception text only in debug mode."""
    logger.exception("Unhandled exception on %s", request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": message, "details": {}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all handlers to app (call once from create_app)."""
    app.add_exception_handler(DeepSearchException, _deep_search_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
