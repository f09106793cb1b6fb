"""Immutable outcome of one matching pass between raw and base issues.

A ``Tracking`` partitions both sides:

- every raw issue is either matched to exactly one base or unmatched
- every base issue is either matched to exactly one raw or unmatched

The partition is checked once at construction; consumers can rely on it
without re-validating.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import TrackingError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from issueflow.domain.model import Issue


type MatchedPairs = tuple[tuple[Issue, Issue], ...]


@dataclass(frozen=True, slots=True)
class Tracking:
    """Matched pairs plus the raws and bases nothing matched."""

    raws: tuple[Issue, ...]
    bases: tuple[Issue, ...]
    pairs: MatchedPairs = ()

    def __post_init__(self) -> None:
        raw_ids = _identity_set(self.raws, side="raw")
        base_ids = _identity_set(self.bases, side="base")
        matched_raws: set[int] = set()
        matched_bases: set[int] = set()
        for raw, base in self.pairs:
            if id(raw) not in raw_ids:
                raise TrackingError(f"Matched raw issue is not part of the raw set: {raw!r}")
            if id(base) not in base_ids:
                raise TrackingError(f"Matched base issue is not part of the base set: {base!r}")
            if id(raw) in matched_raws:
                raise TrackingError(f"Raw issue matched more than once: {raw!r}")
            if id(base) in matched_bases:
                raise TrackingError(f"Base issue matched more than once: {base!r}")
            matched_raws.add(id(raw))
            matched_bases.add(id(base))

    @classmethod
    def of(
        cls,
        raws: Iterable[Issue],
        bases: Iterable[Issue],
        matches: Mapping[Issue, Issue] | Iterable[tuple[Issue, Issue]] = (),
    ) -> Tracking:
        """Build a tracking from raw/base collections and ``raw -> base`` matches."""

        pairs = matches.items() if isinstance(matches, Mapping) else matches
        return cls(raws=tuple(raws), bases=tuple(bases), pairs=tuple(pairs))

    @property
    def matched_raws(self) -> dict[Issue, Issue]:
        """Matched ``raw -> base`` pairs in matcher order."""

        return dict(self.pairs)

    @property
    def unmatched_raws(self) -> tuple[Issue, ...]:
        matched = {id(raw) for raw, _ in self.pairs}
        return tuple(raw for raw in self.raws if id(raw) not in matched)

    @property
    def unmatched_bases(self) -> tuple[Issue, ...]:
        matched = {id(base) for _, base in self.pairs}
        return tuple(base for base in self.bases if id(base) not in matched)


def _identity_set(issues: tuple[Issue, ...], *, side: str) -> set[int]:
    identities: set[int] = set()
    for issue in issues:
        if id(issue) in identities:
            raise TrackingError(f"Duplicate {side} issue in tracking input: {issue!r}")
        identities.add(id(issue))
    return identities
