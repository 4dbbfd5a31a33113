"""Source adapter base: one subclass per ContentType.

A subclass declares which columns it reads, which of them the store may
pattern-filter on, and the weights of its searchable fields. The base class
turns rows into scored SearchResult projections; it never sees secrets
because secret columns are never requested from the store.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar

from app.application.dtos.search import RecordQuery, SearchResult
from app.application.interfaces.repositories import IRecordStore
from app.application.services.fuzzy_matcher import FuzzyMatcher
from app.application.services.text_extraction import extract_snippet
from app.domain.enums import ContentType
from app.domain.value_objects import ResolvedScope
from app.shared.utils.datetime import ensure_utc

logger = logging.getLogger(__name__)

DEFAULT_CANDIDATE_MULTIPLIER = 3
DEFAULT_STORE_PATTERN_LENGTH = 3


@dataclass(frozen=True)
class RowScore:
    """Scoring outcome for one row (before projection)."""

    relevance_score: float
    matched_fields: tuple[str, ...]
    matched_text: str | None


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def join_text(*values: Any, sep: str = " ") -> str | None:
    """Join the non-empty values with sep; None when all are empty."""
    parts = [t for t in (_text(v) for v in values) if t]
    return sep.join(parts) if parts else None


class SourceAdapter(ABC):
    """Fetches and scores candidates of one record type (ISourceAdapter).

    Class attributes:
        content_type: The ContentType this adapter emits.
        columns: Columns requested from the store (never secret payloads).
        store_fields: Subset of columns the store pattern-filters on.
        field_weights: Derived searchable field -> weight (see searchable_values).
        searchable_in_organization_scope: False for types that only make
            sense globally (organization scope then yields []).
        has_active_flag: True when the store excludes inactive rows unless
            include_archived is set.
        section: URL path segment under /organizations/{org}/.
    """

    content_type: ClassVar[ContentType]
    columns: ClassVar[tuple[str, ...]]
    store_fields: ClassVar[tuple[str, ...]]
    field_weights: ClassVar[Mapping[str, float]]
    searchable_in_organization_scope: ClassVar[bool] = True
    has_active_flag: ClassVar[bool] = False
    section: ClassVar[str] = ""

    def __init__(
        self,
        store: IRecordStore,
        matcher: FuzzyMatcher | None = None,
        candidate_multiplier: int = DEFAULT_CANDIDATE_MULTIPLIER,
        store_pattern_length: int = DEFAULT_STORE_PATTERN_LENGTH,
    ) -> None:
        self.store = store
        self.matcher = matcher or FuzzyMatcher()
        self.candidate_multiplier = candidate_multiplier
        self.store_pattern_length = store_pattern_length

    # ---- Per-type hooks ----

    @abstractmethod
    def searchable_values(self, row: Mapping[str, Any]) -> dict[str, str | None]:
        """Return the text of every field named in field_weights for row."""

    @abstractmethod
    def build_result(self, row: Mapping[str, Any], score: RowScore) -> SearchResult:
        """Project row into the unified SearchResult shape."""

    def snippet_source(
        self, row: Mapping[str, Any], values: Mapping[str, str | None]
    ) -> str | None:
        """Non-secret text the matched_text snippet is cut from."""
        return join_text(*(values.get(name) for name in self.field_weights))

    def url_for(self, row: Mapping[str, Any]) -> str:
        return f"/organizations/{row['organization_id']}/{self.section}"

    # ---- Shared behaviour ----

    def store_patterns(self, tokens: Sequence[str], *, fuzzy: bool) -> tuple[str, ...]:
        """Substring patterns the store narrows candidates with.

        Exact mode uses whole tokens. Fuzzy mode uses the leading and trailing
        store_pattern_length characters of each token so one typo on either
        side still reaches the matcher.
        """
        n = self.store_pattern_length
        patterns: list[str] = []
        for token in tokens:
            pieces = [token] if not fuzzy or len(token) <= n else [token[:n], token[-n:]]
            for piece in pieces:
                if piece not in patterns:
                    patterns.append(piece)
        return tuple(patterns)

    def candidate_limit(self, limit: int) -> int:
        return max(1, limit) * self.candidate_multiplier

    def score_row(
        self, tokens: Sequence[str], row: Mapping[str, Any], *, fuzzy: bool
    ) -> RowScore | None:
        """Score row against tokens; None when it does not match.

        Field scores are combined by weighted average over the fields that
        have text. A row is kept when some field reaches the matcher floor
        or, for fuzzy queries spread across fields, when the record's text as
        a whole does.
        """
        values = self.searchable_values(row)
        floor = self.matcher.floor
        weighted = 0.0
        total_weight = 0.0
        contributions: list[tuple[float, int, str]] = []
        for position, (field, weight) in enumerate(self.field_weights.items()):
            text = values.get(field)
            if not text:
                continue
            field_score = self.matcher.score(tokens, text, exact=not fuzzy)
            weighted += weight * field_score
            total_weight += weight
            if field_score > 0 and field_score >= floor:
                contributions.append((weight * field_score, position, field))
        if total_weight == 0 or weighted == 0:
            return None
        if not contributions and not self._matches_across_fields(tokens, values, fuzzy=fuzzy):
            return None

        contributions.sort(key=lambda c: (-c[0], c[1]))
        matched_fields = tuple(field for _, _, field in contributions)
        snippet_text = self.snippet_source(row, values)
        anchors = self.matcher.matching_words(tokens, snippet_text, exact=not fuzzy)
        relevance = round(min(1.0, weighted / total_weight) * 100.0, 2)
        return RowScore(
            relevance_score=relevance,
            matched_fields=matched_fields,
            matched_text=extract_snippet(snippet_text, anchors),
        )

    def _matches_across_fields(
        self, tokens: Sequence[str], values: Mapping[str, str | None], *, fuzzy: bool
    ) -> bool:
        if not fuzzy:
            return False
        whole = join_text(*values.values())
        return self.matcher.score(tokens, whole) >= self.matcher.floor

    async def fetch_candidates(
        self,
        scope: ResolvedScope,
        tokens: Sequence[str],
        limit: int,
        *,
        fuzzy: bool = True,
        include_archived: bool = False,
    ) -> list[SearchResult]:
        """Fetch, score and project up to candidate_limit(limit) results.

        The tenant constraint is part of the store query. Returns [] when the
        type is not searchable in this scope. Store errors propagate.
        """
        if not tokens:
            return []
        if not scope.is_global and not self.searchable_in_organization_scope:
            return []
        bound = self.candidate_limit(limit)
        query = RecordQuery(
            content_type=self.content_type,
            tenant_id=scope.tenant_id,
            columns=self.columns,
            search_fields=self.store_fields,
            patterns=self.store_patterns(tokens, fuzzy=fuzzy),
            limit=bound,
            include_archived=include_archived,
            priority_patterns=tuple(dict.fromkeys(tokens)) if fuzzy else (),
        )
        rows = await self.store.fetch_records(query)
        results: list[SearchResult] = []
        for row in rows:
            score = self.score_row(tokens, row, fuzzy=fuzzy)
            if score is None:
                continue
            results.append(self.build_result(row, score))
        results.sort(key=lambda r: (-r.relevance_score, r.id))
        logger.debug(
            "%s adapter: %d rows fetched, %d scored",
            self.content_type.value,
            len(rows),
            len(results),
        )
        return results[:bound]

    def _result(
        self,
        row: Mapping[str, Any],
        score: RowScore,
        *,
        title: str,
        description: str | None = None,
        category: str | None = None,
        subtype: str | None = None,
        metadata: Mapping[str, Any] | None = None,
        url: str | None = None,
    ) -> SearchResult:
        """Build a SearchResult with the fields every row shares."""
        extras = {k: str(v) for k, v in (metadata or {}).items() if _text(v)}
        return SearchResult(
            id=str(row["id"]),
            type=self.content_type,
            title=title,
            organization_id=str(row["organization_id"]),
            url=url or self.url_for(row),
            relevance_score=score.relevance_score,
            matched_fields=score.matched_fields,
            description=_text(description),
            organization_name=_text(row.get("organization_name")),
            category=_text(category),
            subtype=_text(subtype),
            matched_text=score.matched_text,
            metadata=extras,
            created_at=ensure_utc(row.get("created_at")),
            updated_at=ensure_utc(row.get("updated_at")),
        )
