"""Logging setup and OpenTelemetry span helpers."""

from app.shared.telemetry.logging import setup_logging
from app.shared.telemetry.tracing import TracedOperation, add_span_attributes, traced

__all__ = [
    "setup_logging",
    "traced",
    "add_span_attributes",
    "TracedOperation",
]
