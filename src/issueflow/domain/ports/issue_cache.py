"""Append-only output sink for processed issues.

The cache is opened once per component; the returned appender buffers
issues in append order and flushes them when closed. Appenders never
truncate what earlier appenders of the same run recorded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType

    from issueflow.domain.model import Issue


class IssueCacheError(RuntimeError):
    """Raised when an appender is used after it was closed."""


@runtime_checkable
class IssueAppender(Protocol):
    def append(self, issue: Issue) -> None: ...

    def close(self) -> None: ...

    def __enter__(self) -> IssueAppender: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...


@runtime_checkable
class IssueCache(Protocol):
    def open(self) -> IssueAppender: ...

    def iter_issues(self) -> Iterator[Issue]: ...
