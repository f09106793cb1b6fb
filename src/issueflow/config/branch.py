"""Resolve the branch an analysis runs on.

Rules, in order:

- no branch name: the main branch, long-lived
- a branch known from previous analyses keeps its type
- a new branch is long-lived when its name matches the long-lived pattern
- an explicit target must exist and be long-lived; short-lived branches
  without target merge into the main branch
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from issueflow.domain.model import Branch, BranchType

from .env import env_flag, optional_env_var
from .errors import BranchConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from issueflow.domain.ports.persistence import BranchInfo

DEFAULT_MAIN_BRANCH: Final[str] = "main"


@dataclass(frozen=True, slots=True)
class BranchSettings:
    name: str | None = None
    target: str | None = None
    long_lived_pattern: str | None = None
    main_branch: str = DEFAULT_MAIN_BRANCH
    incremental: bool = False


def get_branch_settings() -> BranchSettings:
    return BranchSettings(
        name=optional_env_var("ISSUEFLOW_BRANCH_NAME"),
        target=optional_env_var("ISSUEFLOW_BRANCH_TARGET"),
        long_lived_pattern=optional_env_var("ISSUEFLOW_LONG_LIVED_BRANCHES_REGEX"),
        main_branch=optional_env_var("ISSUEFLOW_MAIN_BRANCH") or DEFAULT_MAIN_BRANCH,
        incremental=env_flag("ISSUEFLOW_INCREMENTAL"),
    )


def resolve_branch(settings: BranchSettings, known_branches: Iterable[BranchInfo]) -> Branch:
    known = {branch.name: branch for branch in known_branches}
    if settings.name is None or settings.name == settings.main_branch:
        return Branch(name=settings.main_branch, type=BranchType.LONG)

    branch_type = _branch_type(settings.name, settings, known)
    if settings.target is not None:
        target = known.get(settings.target)
        if target is None:
            raise BranchConfigurationError(f"Target branch does not exist: {settings.target}")
        if not target.long_lived:
            raise BranchConfigurationError(f"Target branch is not long-lived: {settings.target}")
        merge_branch: str | None = settings.target
    else:
        merge_branch = None

    if branch_type is BranchType.SHORT:
        return Branch(
            name=settings.name,
            type=branch_type,
            merge_branch=merge_branch or settings.main_branch,
        )
    return Branch(name=settings.name, type=branch_type, merge_branch=merge_branch)


def _branch_type(
    name: str, settings: BranchSettings, known: dict[str, BranchInfo]
) -> BranchType:
    existing = known.get(name)
    if existing is not None:
        return BranchType.LONG if existing.long_lived else BranchType.SHORT

    if settings.long_lived_pattern is None:
        raise MissingConfigurationError(
            "Property must exist: ISSUEFLOW_LONG_LIVED_BRANCHES_REGEX is required to "
            f"classify new branch {name!r}"
        )
    try:
        pattern = re.compile(settings.long_lived_pattern)
    except re.error as exc:
        raise BranchConfigurationError(
            f"Invalid long-lived branches pattern: {settings.long_lived_pattern}"
        ) from exc
    return BranchType.LONG if pattern.fullmatch(name) else BranchType.SHORT
