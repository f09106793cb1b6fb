"""Per-component issue integration: orchestration, observers and bookkeeping."""

from __future__ import annotations

from .crawler import FileVisitor, PostOrderFileCrawler
from .errors import IssueProcessingError
from .integrate import (
    DefaultMode,
    IncrementalMode,
    IntegrateIssues,
    IntegrationMode,
    ShortBranchMode,
)
from .persist import persist_issues
from .removed_components import CloseIssuesOnRemovedComponents
from .unprocessed import ComponentsWithUnprocessedIssues
from .visitors import IssueCounters, IssueVisitor, IssueVisitors

__all__ = [
    "CloseIssuesOnRemovedComponents",
    "ComponentsWithUnprocessedIssues",
    "DefaultMode",
    "FileVisitor",
    "IncrementalMode",
    "IntegrateIssues",
    "IntegrationMode",
    "IssueCounters",
    "IssueProcessingError",
    "IssueVisitor",
    "IssueVisitors",
    "PostOrderFileCrawler",
    "ShortBranchMode",
    "persist_issues",
]
