"""Repositories: record store implementations."""

from app.infrastructure.persistence.repositories.search_repo import (
    SearchRecordRepository,
    escape_like,
)

__all__ = ["SearchRecordRepository", "escape_like"]
