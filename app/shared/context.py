"""Request context management using contextvars.

Holds the current request ID so log records emitted anywhere during a
request (including adapter tasks spawned by the search fan-out, which
inherit the context) can be correlated.

Usage:
    token = set_request_id("abc123")
    request_id = get_request_id()
    reset_request_id(token)
"""

import logging
from contextvars import ContextVar, Token

_current_request_id: ContextVar[str | None] = ContextVar(
    "current_request_id", default=None
)


def set_request_id(request_id: str | None) -> Token[str | None]:
    """Set the request ID for this context. Returns a token for reset_request_id."""
    return _current_request_id.set(request_id)


def reset_request_id(token: Token[str | None]) -> None:
    """Restore the request ID that was current before set_request_id."""
    _current_request_id.reset(token)


def get_request_id() -> str | None:
    """Return the current request ID if set."""
    return _current_request_id.get()


class RequestIdLogFilter(logging.Filter):
    """Attach request_id to every log record ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True
