"""Translate report payloads into domain components and raw issues."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from issueflow.domain.model import Component, Issue, OriginalFile

from .schema import ReportPayload

if TYPE_CHECKING:
    from pathlib import Path

    from .schema import ComponentPayload, RawIssuePayload


@dataclass(slots=True)
class ReportRawIssues:
    """Raw issue source serving the issues listed in a report.

    Every call returns fresh ``Issue`` objects, so a component can be tracked
    more than once without sharing mutated state.
    """

    payloads: dict[str, tuple[RawIssuePayload, ...]] = field(default_factory=dict)

    def raw_issues(self, component: Component) -> list[Issue]:
        return [
            translate_issue(payload, component)
            for payload in self.payloads.get(component.uuid, ())
        ]


@dataclass(frozen=True, slots=True)
class TranslatedReport:
    root: Component
    raw_issues: ReportRawIssues
    payload: ReportPayload


def load_report(path: Path) -> TranslatedReport:
    with path.open(encoding="utf-8") as handle:
        document = json.load(handle)
    return translate_report(ReportPayload.model_validate(document))


def translate_report(payload: ReportPayload) -> TranslatedReport:
    raw_issues = ReportRawIssues()
    root = _translate_component(payload.root, raw_issues)
    return TranslatedReport(root=root, raw_issues=raw_issues, payload=payload)


def translate_issue(payload: RawIssuePayload, component: Component) -> Issue:
    return Issue(
        rule_key=payload.rule_key,
        component_uuid=component.uuid,
        component_key=component.key,
        line=payload.line,
        message=payload.message,
        line_hash=payload.line_hash,
        severity=payload.severity,
        on_disabled_rule=payload.on_disabled_rule,
        attributes=dict(payload.attributes),
    )


def _translate_component(payload: ComponentPayload, raw_issues: ReportRawIssues) -> Component:
    children = tuple(_translate_component(child, raw_issues) for child in payload.children)
    if payload.uuid in raw_issues.payloads:
        raise ValueError(f"Duplicate component uuid in report: {payload.uuid}")
    raw_issues.payloads[payload.uuid] = tuple(payload.issues)
    original_file = None
    if payload.original_file is not None:
        original_file = OriginalFile(
            uuid=payload.original_file.uuid,
            key=payload.original_file.key,
        )
    return Component(
        uuid=payload.uuid,
        key=payload.key,
        type=payload.type,
        status=payload.status,
        original_file=original_file,
        children=children,
    )
