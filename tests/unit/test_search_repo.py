"""Tests for SearchRecordRepository statement building (no database needed)."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from app.application.dtos.search import RecordQuery
from app.application.search.adapters import ADAPTER_CLASSES
from app.domain.enums import ContentType
from app.infrastructure.persistence.repositories import SearchRecordRepository, escape_like


def compile_query(repo: SearchRecordRepository, query: RecordQuery):
    return repo.build_statement(query).compile(dialect=postgresql.dialect())


def make_query(content_type: ContentType, **overrides) -> RecordQuery:
    adapter_cls = next(cls for cls in ADAPTER_CLASSES if cls.content_type is content_type)
    fields = {
        "content_type": content_type,
        "tenant_id": "org-1",
        "columns": adapter_cls.columns,
        "search_fields": adapter_cls.store_fields,
        "patterns": ("net",),
        "limit": 30,
    }
    fields.update(overrides)
    return RecordQuery(**fields)


@pytest.fixture
def repo() -> SearchRecordRepository:
    return SearchRecordRepository(MagicMock())


def test_escape_like() -> None:
    assert escape_like("100%_done\\") == "100\\%\\_done\\\\"


@pytest.mark.parametrize("content_type", list(ContentType))
def test_every_adapter_column_is_mapped(repo: SearchRecordRepository, content_type: ContentType) -> None:
    sql = str(compile_query(repo, make_query(content_type)))
    assert "ILIKE" in sql
    assert "LIMIT" in sql


def test_tenant_filter_and_patterns_bound(repo: SearchRecordRepository) -> None:
    compiled = compile_query(repo, make_query(ContentType.CONTACT, patterns=("net", "50%")))
    sql = str(compiled)
    assert "contact.organization_id =" in sql
    assert "LEFT OUTER JOIN organization" in sql
    assert "ORDER BY contact.updated_at DESC" in sql
    params = set(compiled.params.values())
    assert "org-1" in params
    assert "%net%" in params
    assert "%50\\%%" in params


def test_global_scope_has_no_tenant_filter(repo: SearchRecordRepository) -> None:
    sql = str(compile_query(repo, make_query(ContentType.CONTACT, tenant_id=None)))
    assert "contact.organization_id =" not in sql


def test_secret_columns_not_selected(repo: SearchRecordRepository) -> None:
    sql = str(compile_query(repo, make_query(ContentType.PASSWORD)))
    assert "password_value" not in sql
    assert "password.notes" not in sql


def test_page_content_joins_sidebar_item(repo: SearchRecordRepository) -> None:
    sql = str(compile_query(repo, make_query(ContentType.PAGE_CONTENT)))
    assert "JOIN sidebar_item" in sql
    assert "sidebar_item.organization_id =" in sql
    assert "CAST(page_content.content_data AS TEXT)" in sql
    assert "sidebar_item.is_active IS true" in sql


def test_archived_rows_included_on_request(repo: SearchRecordRepository) -> None:
    sql = str(compile_query(repo, make_query(ContentType.SIDEBAR_ITEM, include_archived=True)))
    assert "is_active" not in sql.split("WHERE", 1)[1]


def test_unknown_column_rejected(repo: SearchRecordRepository) -> None:
    with pytest.raises(ValueError, match="no searchable column"):
        repo.build_statement(make_query(ContentType.CONTACT, columns=("ssn",)))


async def test_fetch_records_returns_dicts() -> None:
    result = MagicMock()
    result.mappings.return_value.all.return_value = [{"id": "c-1", "organization_id": "org-1"}]
    session = MagicMock()
    session.execute = AsyncMock(return_value=result)
    factory = MagicMock()
    factory.return_value.__aenter__ = AsyncMock(return_value=session)
    factory.return_value.__aexit__ = AsyncMock(return_value=False)
    repo = SearchRecordRepository(factory)
    rows = await repo.fetch_records(make_query(ContentType.CONTACT))
    assert rows == [{"id": "c-1", "organization_id": "org-1"}]
    session.execute.assert_awaited_once()


def test_whole_token_matches_ordered_first(repo: SearchRecordRepository) -> None:
    compiled = compile_query(repo, make_query(ContentType.CONTACT, priority_patterns=("network",)))
    sql = str(compiled)
    order_by = sql.split("ORDER BY", 1)[1]
    assert order_by.lstrip().startswith("CASE WHEN")
    assert order_by.index("CASE WHEN") < order_by.index("contact.updated_at DESC")
    assert "%network%" in set(compiled.params.values())


def test_page_content_selects_layout_and_sidebar_item(repo: SearchRecordRepository) -> None:
    sql = str(compile_query(repo, make_query(ContentType.PAGE_CONTENT)))
    assert "page_content.content_type AS content_type" in sql
    assert "page_content.sidebar_item_id AS sidebar_item_id" in sql
