"""Domain value objects."""

from app.domain.value_objects.core import ResolvedScope, is_valid_organization_id

__all__ = ["ResolvedScope", "is_valid_organization_id"]
