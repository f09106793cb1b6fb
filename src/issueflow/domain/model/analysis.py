"""Per-analysis branch context, resolved once at analysis start."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .enums import BranchType

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True)
class Branch:
    name: str
    type: BranchType
    merge_branch: str | None = None

    @property
    def is_short_lived(self) -> bool:
        return self.type is BranchType.SHORT

    def __post_init__(self) -> None:
        if self.is_short_lived and self.merge_branch is None:
            raise ValueError(f"Short-lived branch {self.name!r} requires a merge branch")


@dataclass(frozen=True, slots=True, kw_only=True)
class AnalysisMetadata:
    """Read-only context of one analysis run."""

    analysis_date: datetime
    branch: Branch | None = None
    incremental: bool = False

    @property
    def is_short_lived_branch(self) -> bool:
        return self.branch is not None and self.branch.is_short_lived
