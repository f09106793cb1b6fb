"""Matching raw issues against base histories."""

from __future__ import annotations

from .cross_branch import CrossBranchTracking
from .errors import TrackingError
from .execution import ShortBranchTrackerExecution, TrackerExecution
from .inputs import MergeBranchBaseIssues, PersistedBaseIssues
from .matcher import LineHashMatcher
from .result import Tracking

__all__ = [
    "CrossBranchTracking",
    "LineHashMatcher",
    "MergeBranchBaseIssues",
    "PersistedBaseIssues",
    "ShortBranchTrackerExecution",
    "Tracking",
    "TrackerExecution",
    "TrackingError",
]
