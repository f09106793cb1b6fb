"""Transaction boundary of one analysis run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from issueflow.domain.ports.persistence import BranchRepository, IssueRepository


@dataclass(slots=True)
class IssueRepositories:
    """Repositories sharing the unit of work's transaction."""

    issues: IssueRepository
    branches: BranchRepository


@runtime_checkable
class IssueUnitOfWork(Protocol):
    """Scope persisted reads and writes of a run.

    Nothing becomes visible to other runs before ``commit``; leaving the
    ``with`` block through an exception rolls back.
    """

    @property
    def repositories(self) -> IssueRepositories: ...

    def __enter__(self) -> IssueUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool | None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
