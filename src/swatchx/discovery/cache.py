"""Process-wide memoization of remote classification results."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Iterable

    from swatchx.discovery.classifier import ClassificationResult


class QueryKey(NamedTuple):
    """Identifies one remote lookup."""

    point: int
    param_a: int
    param_b: int


class LookupCache:
    """Insert-if-absent store of classification results.

    Entries are never overwritten or evicted; only ``reset`` removes them.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[QueryKey, ClassificationResult] = {}

    def get(self, key: QueryKey) -> ClassificationResult | None:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: QueryKey, result: ClassificationResult) -> ClassificationResult:
        """Store ``result`` unless ``key`` is already present.

        Returns the value held for ``key`` after the call, which is the
        first value ever written.
        """
        with self._lock:
            return self._entries.setdefault(key, result)

    def has(self, key: QueryKey) -> bool:
        with self._lock:
            return key in self._entries

    def has_all(self, keys: Iterable[QueryKey]) -> bool:
        with self._lock:
            return all(key in self._entries for key in keys)

    def reset(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
