"""Domain model for issue integration."""

from __future__ import annotations

from .analysis import AnalysisMetadata, Branch
from .component import Component, OriginalFile
from .enums import (
    BranchType,
    ComponentStatus,
    ComponentType,
    IssueStatus,
    Resolution,
    Severity,
)
from .issue import Issue

__all__ = [
    "AnalysisMetadata",
    "Branch",
    "BranchType",
    "Component",
    "ComponentStatus",
    "ComponentType",
    "Issue",
    "IssueStatus",
    "OriginalFile",
    "Resolution",
    "Severity",
]
