"""In-memory test doubles shared by unit and API tests."""

from __future__ import annotations

import asyncio
import json
from collections import defaultdict
from datetime import UTC, datetime
from typing import Any

from app.application.dtos.search import RecordQuery
from app.domain.enums import ContentType

BASE_TIME = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)


class FakeRecordStore:
    """In-memory IRecordStore honouring tenant, active flag, patterns and limit.

    Rows are plain dicts keyed by ContentType. Types listed in fail_types raise
    RuntimeError; types in slow_types sleep for slow_seconds first.
    """

    def __init__(self) -> None:
        self.rows: dict[ContentType, list[dict[str, Any]]] = defaultdict(list)
        self.queries: list[RecordQuery] = []
        self.fail_types: set[ContentType] = set()
        self.slow_types: set[ContentType] = set()
        self.slow_seconds = 5.0

    def add(self, record_type: ContentType, /, **row: Any) -> dict[str, Any]:
        row.setdefault("id", f"{record_type.value}-{len(self.rows[record_type]) + 1}")
        row.setdefault("organization_name", None)
        row.setdefault("created_at", BASE_TIME)
        row.setdefault("updated_at", BASE_TIME)
        self.rows[record_type].append(row)
        return row

    @staticmethod
    def _text(value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, (dict, list)):
            return json.dumps(value)
        return str(value)

    def _contains_any(self, row: dict[str, Any], query: RecordQuery, patterns: tuple[str, ...]) -> bool:
        haystacks = [self._text(row.get(f)).lower() for f in query.search_fields]
        return any(p.lower() in h for p in patterns for h in haystacks)

    def _matches(self, row: dict[str, Any], query: RecordQuery) -> bool:
        return not query.patterns or self._contains_any(row, query, query.patterns)

    async def fetch_records(self, query: RecordQuery) -> list[dict[str, Any]]:
        self.queries.append(query)
        if query.content_type in self.slow_types:
            await asyncio.sleep(self.slow_seconds)
        if query.content_type in self.fail_types:
            raise RuntimeError(f"store failure for {query.content_type.value}")
        selected = []
        for row in self.rows[query.content_type]:
            if query.tenant_id is not None and row["organization_id"] != query.tenant_id:
                continue
            if not query.include_archived and row.get("is_active") is False:
                continue
            if self._matches(row, query):
                selected.append(row)
        selected.sort(key=lambda r: r["updated_at"], reverse=True)
        if query.priority_patterns:
            selected.sort(key=lambda r: not self._contains_any(r, query, query.priority_patterns))
        return [dict(r) for r in selected[: query.limit]]

    def types_queried(self) -> set[ContentType]:
        return {q.content_type for q in self.queries}
