"""Record store for deep search: one pattern-filtered SELECT per record type.

Rows are narrowed with ILIKE substring patterns (wildcards escaped) and the
tenant constraint is part of every WHERE clause. Relevance scoring happens
in the application layer; this module only fetches candidates.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import JSON, ColumnElement, Text, case, cast, or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.search import RecordQuery
from app.domain.enums import ContentType
from app.infrastructure.persistence.models import (
    Asset,
    Configuration,
    Contact,
    Document,
    Domain,
    KnownIssue,
    Location,
    Organization,
    PageContent,
    Password,
    Rfc,
    SidebarItem,
    SslCertificate,
    Warranty,
)

logger = logging.getLogger(__name__)


def escape_like(value: str) -> str:
    """Escape ILIKE wildcards % and _ (and the escape char) so value is literal."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass(frozen=True)
class _Source:
    """How one ContentType maps onto tables."""

    model: Any
    tenant_column: Any
    # Logical column name -> expression, for columns not named like the model attribute.
    aliases: Mapping[str, Any] = field(default_factory=dict)
    join: tuple[Any, Any] | None = None
    active_column: Any = None


def _sources() -> dict[ContentType, _Source]:
    def owned(model: Any) -> _Source:
        return _Source(model=model, tenant_column=model.organization_id)

    return {
        ContentType.ORGANIZATION: _Source(
            model=Organization,
            tenant_column=Organization.id,
            active_column=Organization.is_active,
        ),
        ContentType.CONTACT: owned(Contact),
        ContentType.LOCATION: owned(Location),
        ContentType.DOCUMENT: owned(Document),
        ContentType.PASSWORD: owned(Password),
        ContentType.CONFIGURATION: owned(Configuration),
        ContentType.DOMAIN: owned(Domain),
        ContentType.SSL_CERTIFICATE: owned(SslCertificate),
        ContentType.ASSET: owned(Asset),
        ContentType.SIDEBAR_ITEM: _Source(
            model=SidebarItem,
            tenant_column=SidebarItem.organization_id,
            active_column=SidebarItem.is_active,
        ),
        ContentType.PAGE_CONTENT: _Source(
            model=PageContent,
            tenant_column=SidebarItem.organization_id,
            aliases={"page_title": SidebarItem.item_name, "slug": SidebarItem.slug},
            join=(SidebarItem, PageContent.sidebar_item_id == SidebarItem.id),
            active_column=SidebarItem.is_active,
        ),
        ContentType.RFC: owned(Rfc),
        ContentType.KNOWN_ISSUE: owned(KnownIssue),
        ContentType.WARRANTY: owned(Warranty),
    }


class SearchRecordRepository:
    """SQLAlchemy implementation of IRecordStore.

    Opens one session per fetch so adapters can query concurrently.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory
        self._sources = _sources()

    def _column(self, source: _Source, name: str) -> Any:
        if name in source.aliases:
            return source.aliases[name]
        column = getattr(source.model, name, None)
        if column is None:
            raise ValueError(f"{source.model.__name__} has no searchable column {name!r}")
        return column

    @staticmethod
    def _as_text(column: Any) -> ColumnElement[Any]:
        if isinstance(column.type, JSON):
            return cast(column, Text)
        return column

    def _contains_any(
        self, source: _Source, fields: tuple[str, ...], patterns: tuple[str, ...]
    ) -> list[ColumnElement[bool]]:
        """One escaped ILIKE substring test per (field, pattern) pair."""
        return [
            self._as_text(self._column(source, name)).ilike(f"%{escape_like(pattern)}%", escape="\\")
            for name in fields
            for pattern in patterns
        ]

    def build_statement(self, query: RecordQuery) -> Any:
        """Build the candidate SELECT for query (exposed for inspection in tests)."""
        source = self._sources[query.content_type]
        model = source.model
        selected = [self._column(source, name).label(name) for name in query.columns]
        stmt = select(
            model.id.label("id"),
            source.tenant_column.label("organization_id"),
            Organization.name.label("organization_name"),
            model.created_at.label("created_at"),
            model.updated_at.label("updated_at"),
            *selected,
        ).select_from(model)
        if source.join is not None:
            target, onclause = source.join
            stmt = stmt.join(target, onclause)
        if model is not Organization:
            stmt = stmt.outerjoin(Organization, Organization.id == source.tenant_column)

        if query.tenant_id is not None:
            stmt = stmt.where(source.tenant_column == query.tenant_id)
        if source.active_column is not None and not query.include_archived:
            stmt = stmt.where(source.active_column.is_(True))
        conditions = self._contains_any(source, query.search_fields, query.patterns)
        if conditions:
            stmt = stmt.where(or_(*conditions))
        ordering: list[Any] = []
        priority = self._contains_any(source, query.search_fields, query.priority_patterns)
        if priority:
            ordering.append(case((or_(*priority), 0), else_=1))
        ordering.extend((model.updated_at.desc(), model.id))
        return stmt.order_by(*ordering).limit(query.limit)

    async def fetch_records(self, query: RecordQuery) -> list[dict[str, Any]]:
        """Return candidate rows for query as plain dicts.

        Database errors propagate to the caller (the aggregator records the
        content type as failed).
        """
        stmt = self.build_statement(query)
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            rows = [dict(row) for row in result.mappings().all()]
        logger.debug(
            "Fetched %d %s candidates (tenant=%s)",
            len(rows),
            query.content_type.value,
            query.tenant_id,
        )
        return rows
