"""Components known to carry issues not yet processed by the current run."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class ComponentsWithUnprocessedIssues:
    """Thread-safe set of component uuids.

    Populated before traversal with every component that has open issues,
    drained as components are visited; whatever remains afterwards belongs to
    components that disappeared from the tree.
    """

    def __init__(self, uuids: Iterable[str] = ()) -> None:
        self._lock = threading.Lock()
        self._uuids: set[str] = set(uuids)

    def remove(self, uuid: str) -> None:
        with self._lock:
            self._uuids.discard(uuid)

    def uuids(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._uuids)

    def __contains__(self, uuid: object) -> bool:
        with self._lock:
            return uuid in self._uuids

    def __len__(self) -> int:
        with self._lock:
            return len(self._uuids)
