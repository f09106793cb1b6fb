"""SQLAlchemy table metadata and row conversion for persisted issues."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    TypeDecorator,
)

from issueflow.domain.model import Issue, IssueStatus, Resolution, Severity

if TYPE_CHECKING:
    from collections.abc import Mapping


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class TagSetType(TypeDecorator[frozenset[str]]):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value: frozenset[str] | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(sorted(value))

    def process_result_value(self, value: str | None, dialect: Dialect) -> frozenset[str]:
        _ = dialect
        if value is None:
            return frozenset()
        loaded = json.loads(value)
        if not isinstance(loaded, list):
            return frozenset()
        items = cast(list[Any], loaded)
        return frozenset(item for item in items if isinstance(item, str))


class AttributesType(TypeDecorator[dict[str, str]]):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value: dict[str, str] | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(value, sort_keys=True)

    def process_result_value(self, value: str | None, dialect: Dialect) -> dict[str, str]:
        _ = dialect
        if value is None:
            return {}
        loaded = json.loads(value)
        if not isinstance(loaded, dict):
            return {}
        items = cast(dict[Any, Any], loaded)
        return {str(key): str(item) for key, item in items.items()}


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)


def _issue_columns() -> list[Column[Any]]:
    """Columns shared by persisted issues and cached (in-flight) issue records."""

    return [
        Column("component_uuid", String(64), nullable=False),
        Column("component_key", String(400), nullable=False),
        Column("rule_key", String(200), nullable=False),
        Column("line", Integer, nullable=True),
        Column("message", Text, nullable=True),
        Column("line_hash", String(64), nullable=True),
        Column("severity", String(10), nullable=False),
        Column("manual_severity", Boolean, nullable=False, default=False),
        Column("status", String(20), nullable=True),
        Column("resolution", String(20), nullable=True),
        Column("assignee", String(255), nullable=True),
        Column("tags", TagSetType, nullable=True),
        Column("attributes", AttributesType, nullable=True),
        Column("on_disabled_rule", Boolean, nullable=False, default=False),
        Column("creation_date", UTCDateTime, nullable=True),
        Column("update_date", UTCDateTime, nullable=True),
        Column("close_date", UTCDateTime, nullable=True),
    ]


# Core tables -----------------------------------------------------------------

issue_table = Table(
    "issue",
    metadata,
    Column("key", String(64), primary_key=True),
    Column("branch", String(255), nullable=False),
    *_issue_columns(),
    Index("ix_issue_branch_component_uuid", "branch", "component_uuid"),
    Index("ix_issue_branch_component_key", "branch", "component_key"),
)

issue_cache_table = Table(
    "issue_cache_entry",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("run_id", String(64), nullable=False),
    Column("sequence", Integer, nullable=False),
    Column("key", String(64), nullable=True),
    *_issue_columns(),
    Column("is_new", Boolean, nullable=False, default=False),
    Column("copied", Boolean, nullable=False, default=False),
    Column("changed", Boolean, nullable=False, default=False),
    Column("being_closed", Boolean, nullable=False, default=False),
    Index("ix_issue_cache_entry_run_sequence", "run_id", "sequence"),
)

branch_table = Table(
    "branch",
    metadata,
    Column("name", String(255), primary_key=True),
    Column("long_lived", Boolean, nullable=False),
    Column("updated_at", UTCDateTime, nullable=False),
)


# Row conversion --------------------------------------------------------------


def issue_to_row(issue: Issue) -> dict[str, Any]:
    return {
        "key": issue.key,
        "component_uuid": issue.component_uuid,
        "component_key": issue.component_key,
        "rule_key": issue.rule_key,
        "line": issue.line,
        "message": issue.message,
        "line_hash": issue.line_hash,
        "severity": issue.severity.value,
        "manual_severity": issue.manual_severity,
        "status": None if issue.status is None else issue.status.value,
        "resolution": None if issue.resolution is None else issue.resolution.value,
        "assignee": issue.assignee,
        "tags": issue.tags,
        "attributes": dict(issue.attributes),
        "on_disabled_rule": issue.on_disabled_rule,
        "creation_date": issue.creation_date,
        "update_date": issue.update_date,
        "close_date": issue.close_date,
    }


def cache_entry_row(issue: Issue, *, run_id: str, sequence: int) -> dict[str, Any]:
    row = issue_to_row(issue)
    row.update(
        run_id=run_id,
        sequence=sequence,
        is_new=issue.new,
        copied=issue.copied,
        changed=issue.changed,
        being_closed=issue.being_closed,
    )
    return row


def row_to_issue(row: Mapping[str, Any]) -> Issue:
    """Rebuild an issue from a persisted or cached row.

    Rows of the ``issue`` table carry no in-flight flags: the result is a
    settled issue (``new`` false, nothing changed).
    """

    status = row["status"]
    resolution = row["resolution"]
    return Issue(
        key=row["key"],
        component_uuid=row["component_uuid"],
        component_key=row["component_key"],
        rule_key=row["rule_key"],
        line=row["line"],
        message=row["message"],
        line_hash=row["line_hash"],
        severity=Severity(row["severity"]),
        manual_severity=bool(row["manual_severity"]),
        status=None if status is None else IssueStatus(status),
        resolution=None if resolution is None else Resolution(resolution),
        assignee=row["assignee"],
        tags=row["tags"] or frozenset(),
        attributes=dict(row["attributes"] or {}),
        on_disabled_rule=bool(row["on_disabled_rule"]),
        creation_date=row["creation_date"],
        update_date=row["update_date"],
        close_date=row["close_date"],
        new=bool(row.get("is_new", False)),
        copied=bool(row.get("copied", False)),
        changed=bool(row.get("changed", False)),
        being_closed=bool(row.get("being_closed", False)),
    )
