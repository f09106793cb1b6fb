"""Ports feeding the tracking layer with raw and base issues."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from issueflow.domain.model import Component, Issue
    from issueflow.domain.tracking.result import Tracking


@runtime_checkable
class RawIssueSource(Protocol):
    """Issues detected for ``component`` by the current analysis."""

    def raw_issues(self, component: Component) -> Sequence[Issue]: ...


@runtime_checkable
class BaseIssueSource(Protocol):
    """Open issues of a prior history that ``component`` is reconciled with."""

    def base_issues(self, component: Component) -> Sequence[Issue]: ...


@runtime_checkable
class IssueMatcher(Protocol):
    """Black-box matching heuristic between raw and base issues."""

    def match(self, raws: Sequence[Issue], bases: Sequence[Issue]) -> Tracking: ...
