"""Issue cache persisting appended issues into the ``issue_cache_entry`` table.

Each analysis run writes under its own ``run_id`` and discards its rows once
the run is over. An appender buffers rows in memory and writes them in one
transaction when closed.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import delete, insert, select

from issueflow.adapters.sqlalchemy.mappings import cache_entry_row, issue_cache_table, row_to_issue
from issueflow.domain.ports.issue_cache import IssueCacheError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType

    from sqlalchemy.orm import Session, sessionmaker

    from issueflow.domain.model import Issue

log = logging.getLogger(__name__)


@dataclass(slots=True)
class SqlAlchemyIssueAppender:
    _cache: SqlAlchemyIssueCache
    _rows: list[dict[str, Any]] = field(default_factory=list[dict[str, Any]])
    _closed: bool = False

    def append(self, issue: Issue) -> None:
        if self._closed:
            raise IssueCacheError("Cannot append to a closed issue appender")
        self._rows.append(
            cache_entry_row(issue, run_id=self._cache.run_id, sequence=self._cache.next_sequence())
        )

    def close(self) -> None:
        if self._closed:
            raise IssueCacheError("Issue appender already closed")
        self._closed = True
        if not self._rows:
            return
        with self._cache.session_factory() as session, session.begin():
            session.execute(insert(issue_cache_table), self._rows)
        log.debug("Flushed %d cached issues for run %s", len(self._rows), self._cache.run_id)
        self._rows.clear()

    def __enter__(self) -> SqlAlchemyIssueAppender:
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
class SqlAlchemyIssueCache:
    session_factory: sessionmaker[Session]
    run_id: str
    _sequence: Iterator[int] = field(default_factory=itertools.count)

    def next_sequence(self) -> int:
        return next(self._sequence)

    def open(self) -> SqlAlchemyIssueAppender:
        return SqlAlchemyIssueAppender(self)

    def iter_issues(self) -> Iterator[Issue]:
        stmt = (
            select(issue_cache_table)
            .where(issue_cache_table.c.run_id == self.run_id)
            .order_by(issue_cache_table.c.sequence)
        )
        with self.session_factory() as session:
            rows = session.execute(stmt).mappings().all()
        return iter([row_to_issue(row) for row in rows])

    def discard(self) -> int:
        """Delete every row written under this run."""

        stmt = delete(issue_cache_table).where(issue_cache_table.c.run_id == self.run_id)
        with self.session_factory() as session, session.begin():
            deleted = session.execute(stmt).rowcount
        log.debug("Discarded %d cached issues of run %s", deleted, self.run_id)
        return deleted
