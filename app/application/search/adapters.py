"""Source adapters for every searchable record type."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.application.dtos.search import SearchResult
from app.application.search.base import RowScore, SourceAdapter, join_text
from app.application.services.text_extraction import extract_content_text
from app.domain.enums import ContentType


def _iso_date(value: Any) -> str | None:
    if value is None:
        return None
    isoformat = getattr(value, "isoformat", None)
    return isoformat() if isoformat else str(value)


class OrganizationAdapter(SourceAdapter):
    content_type = ContentType.ORGANIZATION
    columns = ("name", "description", "website", "email")
    store_fields = ("name", "description", "website", "email")
    field_weights = {"name": 3.0, "description": 1.5, "website": 1.0, "email": 1.0}
    # Organization scope already names the organization.
    searchable_in_organization_scope = False
    has_active_flag = True

    def searchable_values(self, row: Mapping[str, Any]) -> dict[str, str | None]:
        return {field: row.get(field) for field in self.field_weights}

    def url_for(self, row: Mapping[str, Any]) -> str:
        return f"/organizations/{row['id']}"

    def build_result(self, row: Mapping[str, Any], score: RowScore) -> SearchResult:
        return self._result(
            row,
            score,
            title=row.get("name") or "",
            description=row.get("description"),
            metadata={"website": row.get("website")},
        )


class ContactAdapter(SourceAdapter):
    content_type = ContentType.CONTACT
    section = "contacts"
    columns = ("first_name", "last_name", "company", "title", "email", "phone", "notes", "contact_type")
    store_fields = ("first_name", "last_name", "company", "title", "email", "phone", "notes")
    field_weights = {
        "name": 3.0,
        "company": 2.0,
        "title": 1.5,
        "email": 1.5,
        "phone": 1.0,
        "notes": 0.5,
    }

    def searchable_values(self, row: Mapping[str, Any]) -> dict[str, str | None]:
        return {
            "name": join_text(row.get("first_name"), row.get("last_name")),
            "company": row.get("company"),
            "title": row.get("title"),
            "email": row.get("email"),
            "phone": row.get("phone"),
            "notes": row.get("notes"),
        }

    def build_result(self, row: Mapping[str, Any], score: RowScore) -> SearchResult:
        name = join_text(row.get("first_name"), row.get("last_name")) or ""
        return self._result(
            row,
            score,
            title=name,
            description=join_text(row.get("title"), row.get("company"), sep=" at "),
            subtype=row.get("contact_type"),
            metadata={"email": row.get("email"), "phone": row.get("phone")},
        )


class LocationAdapter(SourceAdapter):
    content_type = ContentType.LOCATION
    section = "locations"
    columns = ("name", "address", "city", "state", "country", "postal_code", "notes", "location_type")
    store_fields = ("name", "address", "city", "state", "country", "postal_code", "notes")
    field_weights = {"name": 3.0, "address": 2.0, "notes": 0.5}

    @staticmethod
    def _address(row: Mapping[str, Any]) -> str | None:
        return join_text(
            row.get("address"),
            row.get("city"),
            row.get("state"),
            row.get("country"),
            row.get("postal_code"),
            sep=", ",
        )

    def searchable_values(self, row: Mapping[str, Any]) -> dict[str, str | None]:
        return {"name": row.get("name"), "address": self._address(row), "notes": row.get("notes")}

    def build_result(self, row: Mapping[str, Any], score: RowScore) -> SearchResult:
        return self._result(
            row,
            score,
            title=row.get("name") or "",
            description=self._address(row),
            subtype=row.get("location_type"),
        )


class DocumentAdapter(SourceAdapter):
    content_type = ContentType.DOCUMENT
    section = "documents"
    columns = ("name", "description", "category", "file_type")
    store_fields = ("name", "description", "category")
    field_weights = {"name": 3.0, "description": 1.5, "category": 1.0}

    def searchable_values(self, row: Mapping[str, Any]) -> dict[str, str | None]:
        return {field: row.get(field) for field in self.field_weights}

    def build_result(self, row: Mapping[str, Any], score: RowScore) -> SearchResult:
        return self._result(
            row,
            score,
            title=row.get("name") or "",
            description=row.get("description"),
            category=row.get("category"),
            subtype=row.get("file_type"),
        )


class PasswordAdapter(SourceAdapter):
    """Password vault entries. The secret value and notes are never requested."""

    content_type = ContentType.PASSWORD
    section = "passwords"
    columns = ("name", "username", "url", "category", "password_type")
    store_fields = ("name", "username", "url", "category")
    field_weights = {"name": 3.0, "username": 2.0, "url": 1.5, "category": 1.0}

    def searchable_values(self, row: Mapping[str, Any]) -> dict[str, str | None]:
        return {field: row.get(field) for field in self.field_weights}

    def build_result(self, row: Mapping[str, Any], score: RowScore) -> SearchResult:
        return self._result(
            row,
            score,
            title=row.get("name") or "",
            description=join_text(row.get("username"), row.get("url"), sep=" @ "),
            category=row.get("category"),
            subtype=row.get("password_type"),
        )


class ConfigurationAdapter(SourceAdapter):
    content_type = ContentType.CONFIGURATION
    section = "configurations"
    columns = ("name", "description", "config_type")
    store_fields = ("name", "description", "config_type")
    field_weights = {"name": 3.0, "description": 1.5, "config_type": 1.0}

    def searchable_values(self, row: Mapping[str, Any]) -> dict[str, str | None]:
        return {field: row.get(field) for field in self.field_weights}

    def build_result(self, row: Mapping[str, Any], score: RowScore) -> SearchResult:
        return self._result(
            row,
            score,
            title=row.get("name") or "",
            description=row.get("description"),
            subtype=row.get("config_type"),
        )


class DomainAdapter(SourceAdapter):
    content_type = ContentType.DOMAIN
    section = "domain-tracker"
    columns = ("domain_name", "registrar", "notes", "expiry_date", "status")
    store_fields = ("domain_name", "registrar", "notes")
    field_weights = {"domain_name": 3.0, "registrar": 1.5, "notes": 0.5}

    def searchable_values(self, row: Mapping[str, Any]) -> dict[str, str | None]:
        return {field: row.get(field) for field in self.field_weights}

    def build_result(self, row: Mapping[str, Any], score: RowScore) -> SearchResult:
        return self._result(
            row,
            score,
            title=row.get("domain_name") or "",
            description=row.get("registrar"),
            subtype=row.get("status"),
            metadata={"registrar": row.get("registrar"), "expiry_date": _iso_date(row.get("expiry_date"))},
        )


class SslCertificateAdapter(SourceAdapter):
    """TLS certificates. The private key is never requested."""

    content_type = ContentType.SSL_CERTIFICATE
    section = "ssl-tracker"
    columns = ("common_name", "issuer", "subject_alt_names", "valid_until", "status")
    store_fields = ("common_name", "issuer", "subject_alt_names")
    field_weights = {"common_name": 3.0, "issuer": 1.5, "subject_alt_names": 1.5}

    def searchable_values(self, row: Mapping[str, Any]) -> dict[str, str | None]:
        return {field: row.get(field) for field in self.field_weights}

    def build_result(self, row: Mapping[str, Any], score: RowScore) -> SearchResult:
        expires = _iso_date(row.get("valid_until"))
        return self._result(
            row,
            score,
            title=row.get("common_name") or "",
            description=join_text(row.get("issuer"), f"expires {expires}" if expires else None, sep=", "),
            subtype=row.get("status"),
            metadata={"issuer": row.get("issuer"), "expires_at": expires},
        )


class AssetAdapter(SourceAdapter):
    content_type = ContentType.ASSET
    section = "assets"
    columns = ("name", "description", "asset_type", "manufacturer", "model", "serial_number", "status")
    store_fields = ("name", "description", "manufacturer", "model", "serial_number")
    field_weights = {
        "name": 3.0,
        "serial_number": 2.0,
        "model": 1.5,
        "manufacturer": 1.0,
        "description": 1.0,
    }

    def searchable_values(self, row: Mapping[str, Any]) -> dict[str, str | None]:
        return {field: row.get(field) for field in self.field_weights}

    def build_result(self, row: Mapping[str, Any], score: RowScore) -> SearchResult:
        return self._result(
            row,
            score,
            title=row.get("name") or "",
            description=join_text(row.get("manufacturer"), row.get("model")) or row.get("description"),
            category=row.get("asset_type"),
            subtype=row.get("status"),
            metadata={"serial_number": row.get("serial_number")},
        )


class SidebarItemAdapter(SourceAdapter):
    content_type = ContentType.SIDEBAR_ITEM
    columns = ("item_name", "slug", "description", "parent_category", "item_type")
    store_fields = ("item_name", "description", "parent_category")
    field_weights = {"item_name": 3.0, "description": 1.5, "parent_category": 1.0}
    has_active_flag = True

    def searchable_values(self, row: Mapping[str, Any]) -> dict[str, str | None]:
        return {field: row.get(field) for field in self.field_weights}

    def url_for(self, row: Mapping[str, Any]) -> str:
        return f"/organizations/{row['organization_id']}/{row.get('slug') or row['id']}"

    def build_result(self, row: Mapping[str, Any], score: RowScore) -> SearchResult:
        return self._result(
            row,
            score,
            title=row.get("item_name") or "",
            description=row.get("description"),
            category=row.get("parent_category"),
            subtype=row.get("item_type"),
            metadata={"slug": row.get("slug")},
        )


class PageContentAdapter(SourceAdapter):
    """Page bodies; tenant and title come from the owning sidebar item."""

    content_type = ContentType.PAGE_CONTENT
    columns = ("page_title", "slug", "content_data", "content_type", "sidebar_item_id")
    store_fields = ("page_title", "content_data")
    field_weights = {"page_title": 2.0, "content": 1.0}
    has_active_flag = True

    def searchable_values(self, row: Mapping[str, Any]) -> dict[str, str | None]:
        return {
            "page_title": row.get("page_title"),
            "content": extract_content_text(row.get("content_data")) or None,
        }

    def snippet_source(
        self, row: Mapping[str, Any], values: Mapping[str, str | None]
    ) -> str | None:
        return values.get("content") or values.get("page_title")

    def url_for(self, row: Mapping[str, Any]) -> str:
        return f"/organizations/{row['organization_id']}/{row.get('slug') or row['id']}"

    def build_result(self, row: Mapping[str, Any], score: RowScore) -> SearchResult:
        return self._result(
            row,
            score,
            title=row.get("page_title") or "",
            description=score.matched_text,
            subtype=row.get("content_type"),
            metadata={"slug": row.get("slug"), "sidebar_item_id": row.get("sidebar_item_id")},
        )


class RfcAdapter(SourceAdapter):
    content_type = ContentType.RFC
    section = "rfc"
    columns = ("title", "description", "status", "priority", "requested_by")
    store_fields = ("title", "description", "status", "requested_by")
    field_weights = {"title": 3.0, "description": 1.5, "requested_by": 1.0, "status": 0.5}

    def searchable_values(self, row: Mapping[str, Any]) -> dict[str, str | None]:
        return {field: row.get(field) for field in self.field_weights}

    def build_result(self, row: Mapping[str, Any], score: RowScore) -> SearchResult:
        return self._result(
            row,
            score,
            title=row.get("title") or "",
            description=row.get("description"),
            category=row.get("priority"),
            subtype=row.get("status"),
            metadata={"requested_by": row.get("requested_by")},
        )


class KnownIssueAdapter(SourceAdapter):
    content_type = ContentType.KNOWN_ISSUE
    section = "known-issues"
    columns = ("title", "description", "workaround", "status", "severity")
    store_fields = ("title", "description", "workaround", "status")
    field_weights = {"title": 3.0, "description": 1.5, "workaround": 1.0, "status": 0.5}

    def searchable_values(self, row: Mapping[str, Any]) -> dict[str, str | None]:
        return {field: row.get(field) for field in self.field_weights}

    def build_result(self, row: Mapping[str, Any], score: RowScore) -> SearchResult:
        return self._result(
            row,
            score,
            title=row.get("title") or "",
            description=row.get("description"),
            category=row.get("severity"),
            subtype=row.get("status"),
        )


class WarrantyAdapter(SourceAdapter):
    content_type = ContentType.WARRANTY
    section = "warranties"
    columns = ("asset_name", "vendor", "contract_number", "notes", "end_date")
    store_fields = ("asset_name", "vendor", "contract_number", "notes")
    field_weights = {"asset_name": 3.0, "vendor": 2.0, "contract_number": 2.0, "notes": 0.5}

    def searchable_values(self, row: Mapping[str, Any]) -> dict[str, str | None]:
        return {field: row.get(field) for field in self.field_weights}

    def build_result(self, row: Mapping[str, Any], score: RowScore) -> SearchResult:
        return self._result(
            row,
            score,
            title=row.get("asset_name") or "",
            description=join_text(row.get("vendor"), row.get("contract_number"), sep=" / "),
            metadata={"vendor": row.get("vendor"), "end_date": _iso_date(row.get("end_date"))},
        )


ADAPTER_CLASSES: tuple[type[SourceAdapter], ...] = (
    OrganizationAdapter,
    ContactAdapter,
    LocationAdapter,
    DocumentAdapter,
    PasswordAdapter,
    ConfigurationAdapter,
    DomainAdapter,
    SslCertificateAdapter,
    AssetAdapter,
    SidebarItemAdapter,
    PageContentAdapter,
    RfcAdapter,
    KnownIssueAdapter,
    WarrantyAdapter,
)
