"""OpenTelemetry span helpers for the search path.

Only opentelemetry-api is used: without a configured SDK every span is a
no-op, so search code can be traced unconditionally. Query text is never
attached to a span; callers pass scope, limits and counts only.
"""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

P = ParamSpec("P")
T = TypeVar("T")

AttributeValue = str | int | float | bool

_tracer = trace.get_tracer("app.search")


def _close_span(span: trace.Span, exc: BaseException | None) -> None:
    if exc is None:
        span.set_status(Status(StatusCode.OK))
        return
    span.set_status(Status(StatusCode.ERROR, str(exc)))
    span.record_exception(exc)


def traced(
    operation_name: str | None = None,
    attributes: dict[str, AttributeValue] | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Run an async function inside a span named operation_name.

    Args:
        operation_name: Span name (defaults to module.funcname).
        attributes: Static attributes set when the span starts.

    Returns:
        Decorator for coroutine functions.
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        span_name = operation_name or f"{func.__module__}.{func.__name__}"

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            with _tracer.start_as_current_span(
                span_name,
                attributes=attributes,
                record_exception=False,
                set_status_on_exception=False,
            ) as span:
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    _close_span(span, e)
                    raise
                _close_span(span, None)
                return result

        return wrapper

    return decorator


def add_span_attributes(**attributes: AttributeValue) -> None:
    """Add attributes to the current span (ignored when not recording)."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)


class TracedOperation:
    """Child span around one unit of work, e.g. a single adapter query.

    Usable with ``with``; the span is ended with OK or ERROR status on exit.
    """

    def __init__(self, operation_name: str, attributes: dict[str, AttributeValue] | None = None) -> None:
        self.operation_name = operation_name
        self.attributes = attributes or {}
        self.span: trace.Span | None = None

    def __enter__(self) -> "TracedOperation":
        self.span = _tracer.start_span(self.operation_name, attributes=self.attributes)
        return self

    def set_attribute(self, key: str, value: AttributeValue) -> None:
        """Set an attribute on the active span."""
        if self.span is not None:
            self.span.set_attribute(key, value)

    def __exit__(
        self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        if self.span is None:
            return
        _close_span(self.span, exc_val)
        self.span.end()
        self.span = None
