"""Persist the issues recorded in the issue cache at the end of a run."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from issueflow.domain.ports import IssueCache, IssueRepository

log = logging.getLogger(__name__)


def persist_issues(cache: IssueCache, repository: IssueRepository) -> int:
    """Write every cached issue to ``repository``; the caller owns the commit."""

    persisted = repository.save(cache.iter_issues())
    log.info("Persisted %d issues", persisted)
    return persisted
