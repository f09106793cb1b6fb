"""Analysis report adapter: JSON payloads to components and raw issues."""

from __future__ import annotations

from .schema import ComponentPayload, OriginalFilePayload, RawIssuePayload, ReportPayload
from .translator import (
    ReportRawIssues,
    TranslatedReport,
    load_report,
    translate_issue,
    translate_report,
)

__all__ = [
    "ComponentPayload",
    "OriginalFilePayload",
    "RawIssuePayload",
    "ReportPayload",
    "ReportRawIssues",
    "TranslatedReport",
    "load_report",
    "translate_issue",
    "translate_report",
]
