"""Status machine driving the automatic (non user-driven) issue transitions.

Open variants are OPEN, CONFIRMED and REOPENED. An issue flagged
``being_closed`` is moved to CLOSED; a fixed issue that shows up again is
reopened. Manual transitions belong to a separate workflow and are not
modelled here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from issueflow.domain.model import IssueStatus, Resolution

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from issueflow.domain.model import Issue

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AutomaticTransition:
    name: str
    condition: Callable[[Issue], bool]
    apply: Callable[[Issue, datetime], None]


def _should_close(issue: Issue) -> bool:
    return issue.being_closed and issue.status is not IssueStatus.CLOSED


def _close(issue: Issue, date: datetime) -> None:
    issue.status = IssueStatus.CLOSED
    issue.resolution = Resolution.REMOVED if issue.on_disabled_rule else Resolution.FIXED
    issue.close_date = date


def _should_reopen(issue: Issue) -> bool:
    return (
        not issue.being_closed
        and issue.status is IssueStatus.RESOLVED
        and issue.resolution is Resolution.FIXED
    )


def _should_reopen_closed(issue: Issue) -> bool:
    return (
        not issue.being_closed
        and issue.status is IssueStatus.CLOSED
        and issue.resolution in {Resolution.FIXED, Resolution.REMOVED}
    )


def _reopen(issue: Issue, date: datetime) -> None:
    _ = date
    issue.status = IssueStatus.REOPENED
    issue.resolution = None
    issue.close_date = None


AUTOMATIC_TRANSITIONS: tuple[AutomaticTransition, ...] = (
    AutomaticTransition("automaticclose", _should_close, _close),
    AutomaticTransition("automaticreopen", _should_reopen, _reopen),
    AutomaticTransition("automaticunclose", _should_reopen_closed, _reopen),
)


@dataclass(slots=True)
class IssueWorkflow:
    transitions: tuple[AutomaticTransition, ...] = AUTOMATIC_TRANSITIONS

    def init_new_open_issue(self, issue: Issue) -> None:
        issue.status = IssueStatus.OPEN
        issue.resolution = None

    def do_automatic_transition(self, issue: Issue, *, date: datetime) -> str | None:
        """Apply the first automatic transition whose condition holds.

        Returns the transition name, or ``None`` when the issue is left as is.
        """

        for transition in self.transitions:
            if transition.condition(issue):
                transition.apply(issue, date)
                issue.update_date = date
                issue.changed = True
                log.debug("Applied %s to issue %s", transition.name, issue.key)
                return transition.name
        return None
