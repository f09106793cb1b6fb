"""Tracking result composed from a short-lived branch and its merge branch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import TrackingError

if TYPE_CHECKING:
    from issueflow.domain.model import Issue

    from .result import Tracking


@dataclass(frozen=True, slots=True)
class CrossBranchTracking:
    """Reconciliation input for a component of a short-lived branch.

    ``base_tracking`` matches the raw issues against the branch's own history;
    ``merge_branch_tracking`` matches them (or the subset left unmatched by the
    first pass) against the long-lived merge branch. A raw issue matched on
    the branch itself never counts as matched with the merge branch.
    """

    base_tracking: Tracking
    merge_branch_tracking: Tracking

    def __post_init__(self) -> None:
        known = {id(raw) for raw in self.base_tracking.raws}
        for raw in self.merge_branch_tracking.raws:
            if id(raw) not in known:
                raise TrackingError(
                    f"Merge branch tracking contains a raw issue unknown to the base tracking: "
                    f"{raw!r}"
                )

    @property
    def unmatched_raws(self) -> tuple[Issue, ...]:
        """Raw issues matched neither on the branch nor on the merge branch."""

        matched_on_merge = {id(raw) for raw, _ in self.merge_branch_tracking.pairs}
        return tuple(
            raw for raw in self.base_tracking.unmatched_raws if id(raw) not in matched_on_merge
        )

    @property
    def matched_with_base(self) -> dict[Issue, Issue]:
        return self.base_tracking.matched_raws

    @property
    def matched_with_merge_branch(self) -> dict[Issue, Issue]:
        """Raw to merge branch issues, for raws not matched on the branch itself."""

        matched_on_base = {id(raw) for raw, _ in self.base_tracking.pairs}
        return {
            raw: other
            for raw, other in self.merge_branch_tracking.pairs
            if id(raw) not in matched_on_base
        }

    @property
    def unmatched_bases(self) -> tuple[Issue, ...]:
        return self.base_tracking.unmatched_bases
