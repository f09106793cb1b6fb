"""Tests for SQLAlchemy repositories."""

from __future__ import annotations

import pytest
from sqlalchemy.orm import Session  # noqa: TC002

from issueflow.adapters.sqlalchemy.repositories import (
    SqlAlchemyBranchRepository,
    SqlAlchemyIssueRepository,
)
from issueflow.domain.model import IssueStatus, Resolution, Severity
from issueflow.domain.ports import BranchInfo
from tests.helpers.issues import PREVIOUS_DATE, make_base, make_file


def test_issue_repository_round_trips_issue_fields(sqlite_session: Session) -> None:
    repository = SqlAlchemyIssueRepository(sqlite_session, branch="main")
    component = make_file()
    issue = make_base(key="AX-1", component=component, assignee="dana")
    issue.tags = frozenset({"security", "cwe"})
    issue.attributes = {"effort": "5min"}
    issue.severity = Severity.CRITICAL
    issue.manual_severity = True

    assert repository.save([issue]) == 1
    sqlite_session.commit()

    [loaded] = repository.load_for_component(component.uuid)
    assert loaded.key == "AX-1"
    assert loaded.rule_key == issue.rule_key
    assert loaded.line == issue.line
    assert loaded.line_hash == issue.line_hash
    assert loaded.status is IssueStatus.OPEN
    assert loaded.severity is Severity.CRITICAL
    assert loaded.manual_severity
    assert loaded.assignee == "dana"
    assert loaded.tags == frozenset({"security", "cwe"})
    assert loaded.attributes == {"effort": "5min"}
    assert loaded.creation_date == PREVIOUS_DATE
    assert not loaded.new
    assert not loaded.being_closed


def test_issue_repository_skips_closed_issues(sqlite_session: Session) -> None:
    repository = SqlAlchemyIssueRepository(sqlite_session, branch="main")
    component = make_file()
    closed = make_base(key="closed", component=component, status=IssueStatus.CLOSED)
    closed.resolution = Resolution.FIXED
    repository.save([make_base(key="open", component=component), closed])
    sqlite_session.commit()

    assert [issue.key for issue in repository.load_for_component(component.uuid)] == ["open"]
    assert repository.component_uuids_with_open_issues() == {component.uuid}


def test_issue_repository_updates_existing_rows(sqlite_session: Session) -> None:
    repository = SqlAlchemyIssueRepository(sqlite_session, branch="main")
    component = make_file()
    issue = make_base(key="AX-1", component=component)
    repository.save([issue])
    sqlite_session.commit()

    issue.status = IssueStatus.CLOSED
    issue.resolution = Resolution.FIXED
    repository.save([issue])
    sqlite_session.commit()

    assert repository.load_for_component(component.uuid) == []
    assert repository.component_uuids_with_open_issues() == set()


def test_issue_repository_is_scoped_to_its_branch(sqlite_session: Session) -> None:
    component = make_file()
    main = SqlAlchemyIssueRepository(sqlite_session, branch="main")
    feature = SqlAlchemyIssueRepository(sqlite_session, branch="feature/login")
    main.save([make_base(key="main-1", component=component)])
    feature.save([make_base(key="feature-1", component=component)])
    sqlite_session.commit()

    assert [issue.key for issue in feature.load_for_component(component.uuid)] == ["feature-1"]
    merge_branch_issues = feature.load_for_branch_component("main", component.key)
    assert [issue.key for issue in merge_branch_issues] == ["main-1"]


def test_issue_repository_orders_by_line(sqlite_session: Session) -> None:
    repository = SqlAlchemyIssueRepository(sqlite_session, branch="main")
    component = make_file()
    repository.save(
        [
            make_base(key="c", component=component, line=30),
            make_base(key="a", component=component, line=10),
            make_base(key="b", component=component, line=20),
        ]
    )
    sqlite_session.commit()

    loaded = repository.load_for_component(component.uuid)

    assert [issue.key for issue in loaded] == ["a", "b", "c"]


def test_issue_repository_rejects_issue_without_key(sqlite_session: Session) -> None:
    repository = SqlAlchemyIssueRepository(sqlite_session, branch="main")
    issue = make_base()
    issue.key = None

    with pytest.raises(ValueError, match="without key"):
        repository.save([issue])


def test_branch_repository_registers_and_updates(sqlite_session: Session) -> None:
    repository = SqlAlchemyBranchRepository(sqlite_session)

    repository.register(BranchInfo("main", long_lived=True))
    repository.register(BranchInfo("feature/login", long_lived=True))
    repository.register(BranchInfo("feature/login", long_lived=False))
    sqlite_session.commit()

    assert repository.list_branches() == [
        BranchInfo("feature/login", long_lived=False),
        BranchInfo("main", long_lived=True),
    ]
