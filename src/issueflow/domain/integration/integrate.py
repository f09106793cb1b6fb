"""Integrate the issues of each file component with their prior history.

For every file, visited post-order, one of three modes is selected:

- short-lived branch: track against the branch's own base and against its
  long-lived merge branch
- incremental: the file did not change, previously persisted issues are
  reused as is
- default: track against the single base history

Each issue then runs through the lifecycle, the visitor chain and finally
the issue cache.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

from issueflow.domain.model import ComponentStatus

from .errors import IssueProcessingError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from issueflow.domain.lifecycle import IssueLifecycle
    from issueflow.domain.model import AnalysisMetadata, Component, Issue
    from issueflow.domain.ports import ComponentIssuesLoader, IssueAppender, IssueCache
    from issueflow.domain.tracking import (
        CrossBranchTracking,
        ShortBranchTrackerExecution,
        Tracking,
        TrackerExecution,
    )

    from .unprocessed import ComponentsWithUnprocessedIssues
    from .visitors import IssueVisitors

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ShortBranchMode:
    tracking: CrossBranchTracking


@dataclass(frozen=True, slots=True)
class IncrementalMode:
    issues: tuple[Issue, ...]


@dataclass(frozen=True, slots=True)
class DefaultMode:
    tracking: Tracking


type IntegrationMode = ShortBranchMode | IncrementalMode | DefaultMode


@dataclass(slots=True, kw_only=True)
class IntegrateIssues:
    """File visitor reconciling raw issues with persisted ones."""

    analysis_metadata: AnalysisMetadata
    tracker: TrackerExecution
    short_branch_tracker: ShortBranchTrackerExecution | None = None
    issues_loader: ComponentIssuesLoader
    issue_cache: IssueCache
    lifecycle: IssueLifecycle
    visitors: IssueVisitors
    components_with_unprocessed_issues: ComponentsWithUnprocessedIssues

    def __post_init__(self) -> None:
        if self.analysis_metadata.is_short_lived_branch and self.short_branch_tracker is None:
            raise ValueError("Short-lived branch analysis requires a short branch tracker")

    def visit_file(self, component: Component) -> None:
        self.process_component(component)

    def process_component(self, component: Component) -> None:
        self._process_issues(component)

        self.components_with_unprocessed_issues.remove(component.uuid)
        if component.original_file is not None:
            self.components_with_unprocessed_issues.remove(component.original_file.uuid)

    def _process_issues(self, component: Component) -> None:
        try:
            with self.issue_cache.open() as appender:
                self.visitors.before_component(component)
                mode = self._select_mode(component)
                log.debug("Integrating issues of %s (%s)", component.key, type(mode).__name__)
                self._integrate(component, mode, appender)
                self.visitors.after_component(component)
        except Exception as exc:
            raise IssueProcessingError(component.key) from exc

    def _select_mode(self, component: Component) -> IntegrationMode:
        if self.analysis_metadata.is_short_lived_branch:
            short_branch_tracker = cast("ShortBranchTrackerExecution", self.short_branch_tracker)
            return ShortBranchMode(short_branch_tracker.track(component))
        if self._is_incremental(component):
            return IncrementalMode(tuple(self.issues_loader.load_for_component(component.uuid)))
        return DefaultMode(self.tracker.track(component))

    def _is_incremental(self, component: Component) -> bool:
        return self.analysis_metadata.incremental and component.status is ComponentStatus.SAME

    def _integrate(
        self, component: Component, mode: IntegrationMode, appender: IssueAppender
    ) -> None:
        match mode:
            case ShortBranchMode(tracking=tracking):
                self._fill_new_open_issues(component, tracking.unmatched_raws, appender)
                self._fill_existing_open_issues(component, tracking.matched_with_base, appender)
                self._fill_copied_open_issues(
                    component, tracking.matched_with_merge_branch, appender
                )
                self._close_unmatched_base_issues(component, tracking.unmatched_bases, appender)
            case IncrementalMode(issues=issues):
                for issue in issues:
                    self._process(component, issue, appender)
            case DefaultMode(tracking=tracking):
                self._fill_new_open_issues(component, tracking.unmatched_raws, appender)
                self._fill_existing_open_issues(component, tracking.matched_raws, appender)
                self._close_unmatched_base_issues(component, tracking.unmatched_bases, appender)

    def _fill_new_open_issues(
        self, component: Component, issues: Iterable[Issue], appender: IssueAppender
    ) -> None:
        for issue in issues:
            self.lifecycle.init_new_open_issue(issue)
            self._process(component, issue, appender)

    def _fill_existing_open_issues(
        self, component: Component, matched: Mapping[Issue, Issue], appender: IssueAppender
    ) -> None:
        for raw, base in matched.items():
            self.lifecycle.merge_existing_open_issue(raw, base)
            self._process(component, raw, appender)

    def _fill_copied_open_issues(
        self, component: Component, matched: Mapping[Issue, Issue], appender: IssueAppender
    ) -> None:
        for raw, other in matched.items():
            self.lifecycle.copy_existing_open_issue(raw, other)
            self._process(component, raw, appender)

    def _close_unmatched_base_issues(
        self, component: Component, issues: Iterable[Issue], appender: IssueAppender
    ) -> None:
        for issue in issues:
            # closing is requested through the flag, the automatic transition performs it
            issue.being_closed = True
            self._process(component, issue, appender)

    def _process(self, component: Component, issue: Issue, appender: IssueAppender) -> None:
        self.lifecycle.do_automatic_transition(issue)
        self.visitors.on_issue(component, issue)
        appender.append(issue)
