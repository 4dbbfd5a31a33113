"""Shared utilities: datetime, generators, sanitization."""

from app.shared.utils.datetime import ensure_utc
from app.shared.utils.generators import generate_cuid
from app.shared.utils.sanitization import InputSanitizer, strip_html

__all__ = [
    "generate_cuid",
    "ensure_utc",
    "InputSanitizer",
    "strip_html",
]
