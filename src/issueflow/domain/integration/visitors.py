"""Observer chain notified while issues of a component are integrated."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from issueflow.domain.model import Component, Issue


class IssueVisitor:
    """Base class for issue observers; every hook defaults to a no-op."""

    def before_component(self, component: Component) -> None:
        _ = component

    def on_issue(self, component: Component, issue: Issue) -> None:
        _ = (component, issue)

    def after_component(self, component: Component) -> None:
        _ = component


@dataclass(slots=True)
class IssueVisitors:
    """Forward every hook to the wrapped visitors, in order."""

    visitors: Sequence[IssueVisitor] = field(default_factory=tuple)

    def before_component(self, component: Component) -> None:
        for visitor in self.visitors:
            visitor.before_component(component)

    def on_issue(self, component: Component, issue: Issue) -> None:
        for visitor in self.visitors:
            visitor.on_issue(component, issue)

    def after_component(self, component: Component) -> None:
        for visitor in self.visitors:
            visitor.after_component(component)


@dataclass(slots=True)
class IssueCounters(IssueVisitor):
    """Tally integrated issues by outcome."""

    components: int = 0
    new: int = 0
    existing: int = 0
    copied: int = 0
    closed: int = 0

    def on_issue(self, component: Component, issue: Issue) -> None:
        _ = component
        if issue.being_closed:
            self.closed += 1
        elif issue.new:
            self.new += 1
        elif issue.copied:
            self.copied += 1
        else:
            self.existing += 1

    def after_component(self, component: Component) -> None:
        _ = component
        self.components += 1

    @property
    def total(self) -> int:
        return self.new + self.existing + self.copied + self.closed
