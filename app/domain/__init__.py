"""Domain layer: value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import ContentType, SearchScope, SearchStatus, SortOrder
from app.domain.exceptions import (
    DeepSearchException,
    EmptyQueryException,
    InvalidScopeException,
    SearchUnavailableException,
    SqlNotConfiguredException,
    ValidationException,
)
from app.domain.value_objects import ResolvedScope

__all__ = [
    # Enums
    "ContentType",
    "SearchScope",
    "SearchStatus",
    "SortOrder",
    # Exceptions
    "DeepSearchException",
    "EmptyQueryException",
    "InvalidScopeException",
    "SearchUnavailableException",
    "SqlNotConfiguredException",
    "ValidationException",
    # Value objects
    "ResolvedScope",
]
