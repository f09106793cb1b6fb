"""Domain port definitions for adapters."""

from __future__ import annotations

from .issue_cache import IssueAppender, IssueCache, IssueCacheError
from .persistence import BranchInfo, BranchRepository, ComponentIssuesLoader, IssueRepository
from .tracking import BaseIssueSource, IssueMatcher, RawIssueSource
from .unit_of_work import IssueRepositories, IssueUnitOfWork

__all__ = [
    "BaseIssueSource",
    "BranchInfo",
    "BranchRepository",
    "ComponentIssuesLoader",
    "IssueAppender",
    "IssueCache",
    "IssueCacheError",
    "IssueMatcher",
    "IssueRepositories",
    "IssueRepository",
    "IssueUnitOfWork",
    "RawIssueSource",
]
