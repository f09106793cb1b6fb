"""Lifecycle operations applied to individual issues during integration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from uuid import uuid4

from .workflow import IssueWorkflow

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from issueflow.domain.model import Issue


def new_issue_key() -> str:
    return str(uuid4())


@dataclass(slots=True)
class IssueLifecycle:
    """Initialise, merge, copy and automatically transition issues.

    Every operation is idempotent: calling it twice with the same arguments
    leaves the issue in the same state as calling it once.
    """

    analysis_date: datetime
    workflow: IssueWorkflow = field(default_factory=IssueWorkflow)
    key_factory: Callable[[], str] = new_issue_key

    def init_new_open_issue(self, issue: Issue) -> None:
        if issue.key is None:
            issue.key = self.key_factory()
        issue.new = True
        issue.copied = False
        if issue.creation_date is None:
            issue.creation_date = self.analysis_date
        issue.update_date = self.analysis_date
        self.workflow.init_new_open_issue(issue)

    def merge_existing_open_issue(self, raw: Issue, base: Issue) -> None:
        """Carry identity and history of ``base`` over to the freshly detected ``raw``.

        Location, message and fingerprint stay those of the current run.
        """

        raw.key = base.key
        raw.new = False
        raw.copied = False
        self._copy_history(raw, base)
        raw.close_date = base.close_date
        raw.update_date = base.update_date
        raw.attributes = {**base.attributes, **raw.attributes}

        raw.changed = _has_moved(raw, base)
        if raw.changed:
            raw.update_date = self.analysis_date

    def copy_existing_open_issue(self, raw: Issue, other: Issue) -> None:
        """Seed ``raw`` from an issue of the merge branch.

        The copy gets its own key: it is a different issue on a different
        branch, only its triage state is shared.
        """

        if raw.key is None:
            raw.key = self.key_factory()
        raw.new = False
        raw.copied = True
        raw.changed = True
        self._copy_history(raw, other)
        raw.update_date = self.analysis_date

    def do_automatic_transition(self, issue: Issue) -> str | None:
        return self.workflow.do_automatic_transition(issue, date=self.analysis_date)

    @staticmethod
    def _copy_history(target: Issue, source: Issue) -> None:
        target.status = source.status
        target.resolution = source.resolution
        target.creation_date = source.creation_date
        target.assignee = source.assignee
        target.tags = source.tags
        if source.manual_severity:
            target.severity = source.severity
            target.manual_severity = True


def _has_moved(raw: Issue, base: Issue) -> bool:
    return (
        raw.line != base.line
        or raw.message != base.message
        or raw.line_hash != base.line_hash
        or raw.severity != base.severity
        or raw.component_uuid != base.component_uuid
    )
