"""Domain value objects for the deep search service.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass

# CUID/UUID-style organization ids: alphanumeric, hyphen, underscore; bounded length.
ORGANIZATION_ID_MAX_LENGTH = 64
_ORGANIZATION_ID_RE = re.compile(
    r"^[a-zA-Z0-9_-]{1," + str(ORGANIZATION_ID_MAX_LENGTH) + r"}$"
)


def is_valid_organization_id(value: str | None) -> bool:
    """Return True if value is a well-formed organization (tenant) id."""
    if not value or len(value) > ORGANIZATION_ID_MAX_LENGTH:
        return False
    return bool(_ORGANIZATION_ID_RE.fullmatch(value))


@dataclass(frozen=True)
class ResolvedScope:
    """Tenant constraint every source adapter must apply.

    tenant_id is None for global scope; otherwise the organization id that
    bounds every returned record.
    """

    tenant_id: str | None = None

    def __post_init__(self) -> None:
        if self.tenant_id is not None and not is_valid_organization_id(self.tenant_id):
            raise ValueError(
                "tenant_id must be None or a well-formed organization id"
            )

    @property
    def is_global(self) -> bool:
        """Return True when no tenant constraint applies."""
        return self.tenant_id is None
