"""In-process issue cache, used by tests and dry runs."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Literal

from issueflow.domain.ports.issue_cache import IssueCacheError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType

    from issueflow.domain.model import Issue


def snapshot(issue: Issue) -> Issue:
    """Copy ``issue`` so later mutations do not leak into the recorded state."""

    return replace(issue, attributes=dict(issue.attributes))


@dataclass(slots=True)
class InMemoryIssueAppender:
    _cache: InMemoryIssueCache
    _buffer: list[Issue] = field(default_factory=list["Issue"])
    _closed: bool = False

    def append(self, issue: Issue) -> None:
        if self._closed:
            raise IssueCacheError("Cannot append to a closed issue appender")
        self._buffer.append(snapshot(issue))

    def close(self) -> None:
        if self._closed:
            raise IssueCacheError("Issue appender already closed")
        self._closed = True
        self._cache.records.extend(self._buffer)
        self._buffer.clear()

    def __enter__(self) -> InMemoryIssueAppender:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        self.close()
        return False


@dataclass(slots=True)
class InMemoryIssueCache:
    records: list[Issue] = field(default_factory=list["Issue"])

    def open(self) -> InMemoryIssueAppender:
        return InMemoryIssueAppender(self)

    def iter_issues(self) -> Iterator[Issue]:
        return iter(tuple(self.records))
