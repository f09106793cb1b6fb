"""Issue lifecycle: status machine plus per-issue integration operations."""

from __future__ import annotations

from .lifecycle import IssueLifecycle, new_issue_key
from .workflow import AUTOMATIC_TRANSITIONS, AutomaticTransition, IssueWorkflow

__all__ = [
    "AUTOMATIC_TRANSITIONS",
    "AutomaticTransition",
    "IssueLifecycle",
    "IssueWorkflow",
    "new_issue_key",
]
