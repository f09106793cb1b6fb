"""Close the issues of components that vanished from the analysed tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from issueflow.domain.lifecycle import IssueLifecycle
    from issueflow.domain.ports import ComponentIssuesLoader, IssueCache

    from .unprocessed import ComponentsWithUnprocessedIssues

log = logging.getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class CloseIssuesOnRemovedComponents:
    """Run after traversal: whatever is still unprocessed was not visited."""

    issues_loader: ComponentIssuesLoader
    issue_cache: IssueCache
    lifecycle: IssueLifecycle
    components_with_unprocessed_issues: ComponentsWithUnprocessedIssues

    def execute(self) -> int:
        """Close the open issues of every removed component; return how many."""

        closed = 0
        with self.issue_cache.open() as appender:
            for uuid in sorted(self.components_with_unprocessed_issues.uuids()):
                for issue in self.issues_loader.load_for_component(uuid):
                    issue.being_closed = True
                    self.lifecycle.do_automatic_transition(issue)
                    appender.append(issue)
                    closed += 1
                self.components_with_unprocessed_issues.remove(uuid)
        if closed:
            log.info("Closed %d issues of removed components", closed)
        return closed
