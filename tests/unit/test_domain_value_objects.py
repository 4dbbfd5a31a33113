"""Tests for domain value objects (organization id format, ResolvedScope)."""

import pytest

from app.domain.value_objects.core import ResolvedScope, is_valid_organization_id


class TestOrganizationId:
    """Organization ids: 1-64 chars of alphanumerics, hyphen and underscore."""

    @pytest.mark.parametrize("value", ["org-1", "ckv9x2abc", "A_b-9", "a" * 64])
    def test_valid_ids(self, value: str) -> None:
        assert is_valid_organization_id(value)

    @pytest.mark.parametrize("value", ["", None, "a" * 65, "org 1", "org:1", "org%", "ørg"])
    def test_invalid_ids(self, value: str | None) -> None:
        assert not is_valid_organization_id(value)


class TestResolvedScope:
    def test_global(self) -> None:
        assert ResolvedScope().is_global

    def test_tenant(self) -> None:
        scope = ResolvedScope(tenant_id="org-1")
        assert not scope.is_global
        assert scope.tenant_id == "org-1"

    def test_malformed_tenant_rejected(self) -> None:
        with pytest.raises(ValueError, match="well-formed"):
            ResolvedScope(tenant_id="org 1")
