"""Base issue sources backed by previously persisted issues."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from issueflow.domain.model import Component, Issue
    from issueflow.domain.ports import ComponentIssuesLoader, IssueRepository


@dataclass(slots=True)
class PersistedBaseIssues:
    """Open issues of the analysed branch.

    A moved file is reconciled with the issues of the file it was moved from.
    """

    loader: ComponentIssuesLoader

    def base_issues(self, component: Component) -> list[Issue]:
        original = component.original_file
        uuid = original.uuid if original is not None else component.uuid
        return self.loader.load_for_component(uuid)


@dataclass(slots=True)
class MergeBranchBaseIssues:
    """Open issues of the same file on the long-lived merge branch."""

    repository: IssueRepository
    merge_branch: str

    def base_issues(self, component: Component) -> list[Issue]:
        return self.repository.load_for_branch_component(self.merge_branch, component.key)
