"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import insert, select, update

from issueflow.adapters.sqlalchemy.mappings import (
    branch_table,
    issue_table,
    issue_to_row,
    row_to_issue,
)
from issueflow.domain.model import IssueStatus
from issueflow.domain.ports.persistence import BranchInfo

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy import Select
    from sqlalchemy.orm import Session

    from issueflow.domain.model import Issue


class SqlAlchemyIssueRepository:
    """Issues of one branch; closed issues are never handed out as bases."""

    def __init__(self, session: Session, *, branch: str) -> None:
        self.session = session
        self.branch = branch

    def load_for_component(self, component_uuid: str) -> list[Issue]:
        stmt = self._open_issues(self.branch).where(
            issue_table.c.component_uuid == component_uuid
        )
        return self._load(stmt)

    def load_for_branch_component(self, branch: str, component_key: str) -> list[Issue]:
        stmt = self._open_issues(branch).where(issue_table.c.component_key == component_key)
        return self._load(stmt)

    def component_uuids_with_open_issues(self) -> set[str]:
        stmt = (
            select(issue_table.c.component_uuid)
            .where(issue_table.c.branch == self.branch)
            .where(issue_table.c.status != IssueStatus.CLOSED.value)
            .distinct()
        )
        return set(self.session.execute(stmt).scalars())

    def save(self, issues: Iterable[Issue]) -> int:
        """Insert or update ``issues`` by key; return how many rows were written."""

        written = 0
        for issue in issues:
            if issue.key is None:
                raise ValueError(f"Cannot persist an issue without key: {issue!r}")
            row = issue_to_row(issue)
            row["branch"] = self.branch
            exists = self.session.execute(
                select(issue_table.c.key).where(issue_table.c.key == issue.key)
            ).first()
            if exists is None:
                self.session.execute(insert(issue_table).values(**row))
            else:
                self.session.execute(
                    update(issue_table).where(issue_table.c.key == issue.key).values(**row)
                )
            written += 1
        return written

    @staticmethod
    def _open_issues(branch: str) -> Select[tuple[object, ...]]:
        return (
            select(issue_table)
            .where(issue_table.c.branch == branch)
            .where(issue_table.c.status != IssueStatus.CLOSED.value)
            .order_by(issue_table.c.line, issue_table.c.rule_key, issue_table.c.key)
        )

    def _load(self, stmt: Select[tuple[object, ...]]) -> list[Issue]:
        return [row_to_issue(row) for row in self.session.execute(stmt).mappings()]


class SqlAlchemyBranchRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_branches(self) -> list[BranchInfo]:
        stmt = select(branch_table.c.name, branch_table.c.long_lived).order_by(
            branch_table.c.name
        )
        return [
            BranchInfo(name=name, long_lived=bool(long_lived))
            for name, long_lived in self.session.execute(stmt)
        ]

    def register(self, branch: BranchInfo) -> None:
        values = {"long_lived": branch.long_lived, "updated_at": datetime.now(tz=UTC)}
        exists = self.session.execute(
            select(branch_table.c.name).where(branch_table.c.name == branch.name)
        ).first()
        if exists is None:
            self.session.execute(insert(branch_table).values(name=branch.name, **values))
        else:
            self.session.execute(
                update(branch_table).where(branch_table.c.name == branch.name).values(**values)
            )
