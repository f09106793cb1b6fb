"""Reference matcher pairing raw and base issues by rule and location."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .result import Tracking

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Sequence

    from issueflow.domain.model import Issue

type MatchKey = Callable[[Issue], Hashable | None]


def _rule_hash_line(issue: Issue) -> Hashable | None:
    if issue.line_hash is None:
        return None
    return (issue.rule_key, issue.line_hash, issue.line)


def _rule_hash(issue: Issue) -> Hashable | None:
    if issue.line_hash is None:
        return None
    return (issue.rule_key, issue.line_hash)


def _rule_line_message(issue: Issue) -> Hashable | None:
    if issue.line is None:
        return None
    return (issue.rule_key, issue.line, issue.message)


DEFAULT_PASSES: tuple[MatchKey, ...] = (_rule_hash_line, _rule_hash, _rule_line_message)


@dataclass(slots=True)
class LineHashMatcher:
    """Multi-pass exact matcher.

    Each pass keys the still unmatched issues on both sides and pairs them in
    input order; the first candidate wins. Issues whose key is ``None`` sit a
    pass out.
    """

    passes: tuple[MatchKey, ...] = DEFAULT_PASSES

    def match(self, raws: Sequence[Issue], bases: Sequence[Issue]) -> Tracking:
        pairs: list[tuple[Issue, Issue]] = []
        pending_raws = list(raws)
        pending_bases = list(bases)
        for key_of in self.passes:
            if not pending_raws or not pending_bases:
                break
            candidates: dict[Hashable, list[Issue]] = defaultdict(list)
            for base in pending_bases:
                key = key_of(base)
                if key is not None:
                    candidates[key].append(base)

            matched_bases: set[int] = set()
            still_pending: list[Issue] = []
            for raw in pending_raws:
                key = key_of(raw)
                bucket = candidates.get(key) if key is not None else None
                if not bucket:
                    still_pending.append(raw)
                    continue
                base = bucket.pop(0)
                matched_bases.add(id(base))
                pairs.append((raw, base))

            pending_raws = still_pending
            pending_bases = [base for base in pending_bases if id(base) not in matched_bases]

        return Tracking.of(raws, bases, pairs)
