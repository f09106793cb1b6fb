"""Run the matcher for one component against its prior histories."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .cross_branch import CrossBranchTracking

if TYPE_CHECKING:
    from issueflow.domain.model import Component
    from issueflow.domain.ports.tracking import BaseIssueSource, IssueMatcher, RawIssueSource

    from .result import Tracking

log = logging.getLogger(__name__)


@dataclass(slots=True)
class TrackerExecution:
    """Match the raw issues of a component against its single base history."""

    raw_source: RawIssueSource
    base_source: BaseIssueSource
    matcher: IssueMatcher

    def track(self, component: Component) -> Tracking:
        raws = self.raw_source.raw_issues(component)
        bases = self.base_source.base_issues(component)
        tracking = self.matcher.match(raws, bases)
        log.debug(
            "Tracked %s: raws=%d, bases=%d, matched=%d",
            component.key,
            len(raws),
            len(bases),
            len(tracking.pairs),
        )
        return tracking


@dataclass(slots=True)
class ShortBranchTrackerExecution:
    """Track a short-lived branch component against its base, then its merge branch.

    Only raws left unmatched by the branch's own history are offered to the
    merge branch matcher.
    """

    raw_source: RawIssueSource
    base_source: BaseIssueSource
    merge_branch_source: BaseIssueSource
    matcher: IssueMatcher

    def track(self, component: Component) -> CrossBranchTracking:
        raws = self.raw_source.raw_issues(component)
        base_tracking = self.matcher.match(raws, self.base_source.base_issues(component))
        merge_branch_tracking = self.matcher.match(
            base_tracking.unmatched_raws,
            self.merge_branch_source.base_issues(component),
        )
        return CrossBranchTracking(
            base_tracking=base_tracking,
            merge_branch_tracking=merge_branch_tracking,
        )
