"""Ports for loading and storing persisted issues and branches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from issueflow.domain.model import Issue


@dataclass(frozen=True, slots=True)
class BranchInfo:
    """Branch already known from previous analyses."""

    name: str
    long_lived: bool


@runtime_checkable
class ComponentIssuesLoader(Protocol):
    """Load the open issues previously persisted for a component."""

    def load_for_component(self, component_uuid: str) -> list[Issue]: ...


@runtime_checkable
class IssueRepository(ComponentIssuesLoader, Protocol):
    """Persistence contract for the issues of the analysed branch.

    Implementations are scoped to one branch; only ``load_for_branch_component``
    reaches into another branch's issues.
    """

    def load_for_branch_component(self, branch: str, component_key: str) -> list[Issue]: ...

    def component_uuids_with_open_issues(self) -> set[str]: ...

    def save(self, issues: Iterable[Issue]) -> int: ...


@runtime_checkable
class BranchRepository(Protocol):
    def list_branches(self) -> Sequence[BranchInfo]: ...

    def register(self, branch: BranchInfo) -> None: ...
