"""Application orchestration entry points."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import uuid4

from issueflow.adapters.report import load_report
from issueflow.adapters.sqlalchemy.issue_cache import SqlAlchemyIssueCache
from issueflow.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyIssueUnitOfWork,
    is_started,
    session_factory,
    startup,
)
from issueflow.config import get_branch_settings, resolve_branch
from issueflow.domain.integration import (
    CloseIssuesOnRemovedComponents,
    ComponentsWithUnprocessedIssues,
    IntegrateIssues,
    IssueCounters,
    IssueVisitors,
    PostOrderFileCrawler,
    persist_issues,
)
from issueflow.domain.lifecycle import IssueLifecycle
from issueflow.domain.model import AnalysisMetadata
from issueflow.domain.ports import BranchInfo
from issueflow.domain.tracking import (
    LineHashMatcher,
    MergeBranchBaseIssues,
    PersistedBaseIssues,
    ShortBranchTrackerExecution,
    TrackerExecution,
)

if TYPE_CHECKING:
    from datetime import datetime
    from pathlib import Path

    from issueflow.config import BranchSettings
    from issueflow.domain.integration import IssueVisitor
    from issueflow.domain.model import Branch, Component
    from issueflow.domain.ports import IssueMatcher, RawIssueSource


log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class IntegrationResult:
    """Summary of one analysis run."""

    run_id: str
    branch: Branch
    components: int
    new: int
    existing: int
    copied: int
    closed: int
    closed_on_removed_components: int
    persisted: int


def integrate_report(
    report_path: Path,
    *,
    settings: BranchSettings | None = None,
    matcher: IssueMatcher | None = None,
    database_uri: str | None = None,
) -> IntegrationResult:
    """Integrate the issues of a JSON analysis report into the issue store."""

    if not is_started():
        startup(database_uri=database_uri)
    report = load_report(report_path)
    return integrate_issues(
        report.root,
        raw_source=report.raw_issues,
        analysis_date=report.payload.analysis_date,
        settings=settings or get_branch_settings(),
        matcher=matcher,
    )


def integrate_issues(
    root: Component,
    *,
    raw_source: RawIssueSource,
    analysis_date: datetime,
    settings: BranchSettings,
    matcher: IssueMatcher | None = None,
    extra_visitors: tuple[IssueVisitor, ...] = (),
    run_id: str | None = None,
) -> IntegrationResult:
    """Run one analysis: integrate every file of ``root`` and persist the outcome."""

    effective_run_id = run_id or uuid4().hex
    effective_matcher = matcher or LineHashMatcher()

    cache = SqlAlchemyIssueCache(session_factory(), effective_run_id)
    try:
        with SqlAlchemyIssueUnitOfWork(branch=settings.name or settings.main_branch) as uow:
            repositories = uow.repositories
            branch = resolve_branch(settings, repositories.branches.list_branches())
            metadata = AnalysisMetadata(
                analysis_date=analysis_date,
                branch=branch,
                incremental=settings.incremental,
            )
            log.info(
                "Starting issue integration: run=%s, branch=%s (%s), merge_branch=%s, "
                "incremental=%s",
                effective_run_id,
                branch.name,
                branch.type,
                branch.merge_branch,
                metadata.incremental,
            )

            unprocessed = ComponentsWithUnprocessedIssues(
                repositories.issues.component_uuids_with_open_issues()
            )
            lifecycle = IssueLifecycle(analysis_date=analysis_date)
            counters = IssueCounters()
            base_source = PersistedBaseIssues(repositories.issues)

            short_branch_tracker = None
            if branch.is_short_lived and branch.merge_branch is not None:
                short_branch_tracker = ShortBranchTrackerExecution(
                    raw_source=raw_source,
                    base_source=base_source,
                    merge_branch_source=MergeBranchBaseIssues(
                        repositories.issues, branch.merge_branch
                    ),
                    matcher=effective_matcher,
                )

            integrate = IntegrateIssues(
                analysis_metadata=metadata,
                tracker=TrackerExecution(raw_source, base_source, effective_matcher),
                short_branch_tracker=short_branch_tracker,
                issues_loader=repositories.issues,
                issue_cache=cache,
                lifecycle=lifecycle,
                visitors=IssueVisitors((counters, *extra_visitors)),
                components_with_unprocessed_issues=unprocessed,
            )
            PostOrderFileCrawler(integrate).visit(root)

            closed_on_removed = CloseIssuesOnRemovedComponents(
                issues_loader=repositories.issues,
                issue_cache=cache,
                lifecycle=lifecycle,
                components_with_unprocessed_issues=unprocessed,
            ).execute()

            persisted = persist_issues(cache, repositories.issues)
            repositories.branches.register(
                BranchInfo(name=branch.name, long_lived=not branch.is_short_lived)
            )
            uow.commit()
    finally:
        cache.discard()

    result = IntegrationResult(
        run_id=effective_run_id,
        branch=branch,
        components=counters.components,
        new=counters.new,
        existing=counters.existing,
        copied=counters.copied,
        closed=counters.closed,
        closed_on_removed_components=closed_on_removed,
        persisted=persisted,
    )
    log.info(
        "Finished issue integration: components=%s, new=%s, existing=%s, copied=%s, "
        "closed=%s, closed_on_removed=%s",
        result.components,
        result.new,
        result.existing,
        result.copied,
        result.closed,
        result.closed_on_removed_components,
    )
    return result
