"""Domain enumerations for the deep search service.

Enums represent fixed sets of domain values (content types, scopes, statuses).
ContentType is closed: every member has exactly one source adapter.
"""

from enum import Enum


class ContentType(str, Enum):
    """Searchable record type. Each member maps to exactly one source adapter."""

    ORGANIZATION = "organization"
    CONTACT = "contact"
    LOCATION = "location"
    DOCUMENT = "document"
    PASSWORD = "password"
    CONFIGURATION = "configuration"
    DOMAIN = "domain"
    SSL_CERTIFICATE = "ssl_certificate"
    ASSET = "asset"
    SIDEBAR_ITEM = "sidebar_item"
    PAGE_CONTENT = "page_content"
    RFC = "rfc"
    KNOWN_ISSUE = "known_issue"
    WARRANTY = "warranty"

    @classmethod
    def values(cls) -> list[str]:
        """Return all content type values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [member.value for member in cls]


class SearchScope(str, Enum):
    """Whether a search spans all organizations or a single tenant."""

    GLOBAL = "global"
    ORGANIZATION = "organization"


class SearchStatus(str, Enum):
    """Outcome of a search: all adapters answered, or some failed or timed out."""

    OK = "ok"
    PARTIAL_FAILURE = "partial_failure"


class SortOrder(str, Enum):
    """Result ordering requested by the caller."""

    RELEVANCE = "relevance"
    DATE = "date"
    NAME = "name"
