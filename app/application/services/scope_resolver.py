"""Scope resolution: request scope -> tenant constraint for every adapter."""

from __future__ import annotations

import logging

from app.domain.enums import SearchScope
from app.domain.exceptions import InvalidScopeException
from app.domain.value_objects import ResolvedScope, is_valid_organization_id

logger = logging.getLogger(__name__)


class ScopeResolver:
    """Validates the requested scope; performs no data access."""

    def resolve(
        self, scope: SearchScope | str, organization_id: str | None = None
    ) -> ResolvedScope:
        """Return the tenant constraint for scope.

        Args:
            scope: global or organization.
            organization_id: Required for organization scope; ignored for global.

        Returns:
            ResolvedScope with tenant_id None (global) or the organization id.

        Raises:
            InvalidScopeException: Unknown scope, or organization scope with a
                missing, blank or malformed organization id.
        """
        try:
            scope = SearchScope(scope)
        except ValueError:
            raise InvalidScopeException(
                f"Unknown search scope: {scope!r} (use 'global' or 'organization')"
            ) from None

        if scope is SearchScope.GLOBAL:
            if organization_id:
                logger.debug(
                    "Ignoring organization_id %s for global search scope",
                    organization_id,
                )
            return ResolvedScope(tenant_id=None)

        org_id = (organization_id or "").strip()
        if not org_id:
            raise InvalidScopeException(
                "organization_id is required when scope is 'organization'"
            )
        if not is_valid_organization_id(org_id):
            raise InvalidScopeException(
                "Invalid organization_id format (use alphanumeric, hyphen, "
                "underscore; max 64 characters)",
                organization_id=org_id,
            )
        return ResolvedScope(tenant_id=org_id)
