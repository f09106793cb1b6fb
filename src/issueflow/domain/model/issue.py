"""Issue entity shared by raw (freshly detected) and base (persisted) issues."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .enums import Severity

if TYPE_CHECKING:
    from datetime import datetime

    from .enums import IssueStatus, Resolution


@dataclass(eq=False, kw_only=True)
class Issue:
    """A finding attached to one component.

    Issues compare by identity: the tracking layer keys matched pairs by the
    issue objects themselves, and two raw issues with identical fields are
    still two findings.
    """

    rule_key: str
    component_uuid: str
    component_key: str
    key: str | None = None
    line: int | None = None
    message: str | None = None
    line_hash: str | None = None
    severity: Severity = Severity.MAJOR
    manual_severity: bool = False
    status: IssueStatus | None = None
    resolution: Resolution | None = None
    assignee: str | None = None
    tags: frozenset[str] = frozenset()
    attributes: dict[str, str] = field(default_factory=dict)

    creation_date: datetime | None = None
    update_date: datetime | None = None
    close_date: datetime | None = None

    new: bool = True
    copied: bool = False
    changed: bool = False
    being_closed: bool = False
    on_disabled_rule: bool = False

    def __repr__(self) -> str:
        return (
            f"Issue(key={self.key!r}, rule_key={self.rule_key!r}, "
            f"component_key={self.component_key!r}, line={self.line!r}, status={self.status!r})"
        )
