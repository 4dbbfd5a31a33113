"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.asset import Asset
from app.infrastructure.persistence.models.configuration import Configuration
from app.infrastructure.persistence.models.contact import Contact
from app.infrastructure.persistence.models.document import Document
from app.infrastructure.persistence.models.domain import Domain
from app.infrastructure.persistence.models.known_issue import KnownIssue
from app.infrastructure.persistence.models.location import Location
from app.infrastructure.persistence.models.mixins import (
    ActiveFlagMixin,
    CuidMixin,
    OrganizationMixin,
    OrganizationScopedModel,
    TimestampMixin,
)
from app.infrastructure.persistence.models.organization import Organization
from app.infrastructure.persistence.models.page_content import PageContent
from app.infrastructure.persistence.models.password import Password
from app.infrastructure.persistence.models.rfc import Rfc
from app.infrastructure.persistence.models.sidebar_item import SidebarItem
from app.infrastructure.persistence.models.ssl_certificate import SslCertificate
from app.infrastructure.persistence.models.warranty import Warranty

__all__ = [
    "ActiveFlagMixin",
    "Asset",
    "Configuration",
    "Contact",
    "CuidMixin",
    "Document",
    "Domain",
    "KnownIssue",
    "Location",
    "Organization",
    "OrganizationMixin",
    "OrganizationScopedModel",
    "PageContent",
    "Password",
    "Rfc",
    "SidebarItem",
    "SslCertificate",
    "TimestampMixin",
    "Warranty",
]
