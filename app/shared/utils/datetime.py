"""UTC datetime helpers.

Record timestamps and request date filters are compared directly, so every
datetime crossing a boundary (database row, query parameter) goes through
ensure_utc first.
"""

from datetime import UTC, datetime


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Return dt as a UTC-aware datetime.

    - None stays None
    - Naive values are assumed to be UTC already
    - Aware values are converted to UTC

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
