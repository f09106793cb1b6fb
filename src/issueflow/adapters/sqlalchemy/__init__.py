"""SQLAlchemy adapter package for issueflow."""

from __future__ import annotations

from .issue_cache import SqlAlchemyIssueAppender, SqlAlchemyIssueCache
from .mappings import branch_table, issue_cache_table, issue_table, metadata
from .repositories import SqlAlchemyBranchRepository, SqlAlchemyIssueRepository

__all__ = [
    "SqlAlchemyBranchRepository",
    "SqlAlchemyIssueAppender",
    "SqlAlchemyIssueCache",
    "SqlAlchemyIssueRepository",
    "branch_table",
    "issue_cache_table",
    "issue_table",
    "metadata",
]
