"""Adaptive discovery of distinct labels over the cyclic 0-359 domain.

Phases of a discovery:
    1. Coarse sampling every ``coarse_step`` points (36 points by default).
    2. Boundary detection between cyclically adjacent coarse samples whose
       labels differ. No remote calls.
    3. Refinement: every point strictly inside each boundary range.
    4. Collection: the first point per label, in ascending point order.

Lookups are cache-first. Uncached points are dispatched in sequential
batches of ``batch_size``; all lookups in a batch run concurrently. The
cancel token is checked before and after every batch.

Labels that occupy a span strictly between two agreeing coarse samples are
not found. Callers that need every label should use ``lookup_many`` over
``generate_points(360)``.
"""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from swatchx.discovery.cache import QueryKey
from swatchx.discovery.cancellation import CancelToken
from swatchx.discovery.classifier import DOMAIN_SIZE
from swatchx.discovery.errors import Cancelled, InvalidInput

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from swatchx.discovery.cache import LookupCache
    from swatchx.discovery.classifier import ClassificationResult, RemoteClassifier

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE: int = 20
DEFAULT_COARSE_STEP: int = 10
MAX_COARSE_STEP: int = 180
PARAM_MIN: int = 0
PARAM_MAX: int = 100


# ---------------------------------------------------------------------------
# Domain helpers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BoundaryRange:
    """Cyclic span between two coarse samples with different labels.

    ``end`` is numerically smaller than ``start`` when the span wraps 359 -> 0.
    """

    start: int
    end: int

    @property
    def length(self) -> int:
        return (self.end - self.start) % DOMAIN_SIZE

    def interior(self) -> list[int]:
        """Points strictly between ``start`` and ``end``, wrapping at 360."""
        end = self.end if self.end >= self.start else self.end + DOMAIN_SIZE
        return [point % DOMAIN_SIZE for point in range(self.start + 1, end)]


@dataclass
class DiscoverySession:
    """State owned by a single engine call."""

    param_a: int
    param_b: int
    token: CancelToken
    results: dict[int, ClassificationResult] = field(default_factory=dict)
    remote_calls: int = 0

    def key(self, point: int) -> QueryKey:
        return QueryKey(point, self.param_a, self.param_b)


def coarse_points(step: int = DEFAULT_COARSE_STEP) -> list[int]:
    """Return the coarse sampling grid ``0, step, 2*step, ...`` below 360."""
    return list(range(0, DOMAIN_SIZE, step))


def generate_points(count: int = DOMAIN_SIZE) -> list[int]:
    """Return ``count`` evenly distributed domain points."""
    if count < 1:
        raise InvalidInput(f"count must be at least 1, got {count}")
    step = DOMAIN_SIZE / count
    return [math.floor(i * step + 0.5) % DOMAIN_SIZE for i in range(count)]


def detect_boundaries(
    points: Sequence[int],
    results: Mapping[int, ClassificationResult],
) -> list[BoundaryRange]:
    """Pair each coarse point with its cyclic successor and keep label changes.

    Pairs where either side is missing or unlabeled never form a boundary.
    """
    ranges: list[BoundaryRange] = []
    for i, start in enumerate(points):
        end = points[(i + 1) % len(points)]
        current = results.get(start)
        following = results.get(end)
        if current is None or following is None:
            continue
        if current.has_label and following.has_label and current.label != following.label:
            ranges.append(BoundaryRange(start=start, end=end))
    return ranges


def collect_distinct(results: Mapping[int, ClassificationResult]) -> list[ClassificationResult]:
    """Return one result per label; the lowest point holding a label wins."""
    seen: set[str] = set()
    distinct: list[ClassificationResult] = []
    for point in sorted(results):
        result = results[point]
        if not result.has_label or result.label in seen:
            continue
        seen.add(result.label)
        distinct.append(result)
    return distinct


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class AdaptiveDiscoveryEngine:
    """Finds the distinct labels a remote classifier assigns across the domain."""

    def __init__(
        self,
        classifier: RemoteClassifier,
        cache: LookupCache,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
        coarse_step: int = DEFAULT_COARSE_STEP,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        if not 1 <= coarse_step <= MAX_COARSE_STEP:
            raise ValueError(f"coarse_step must be in 1..{MAX_COARSE_STEP}, got {coarse_step}")
        self._classifier = classifier
        self._cache = cache
        self._batch_size = batch_size
        self._coarse_step = coarse_step

    @property
    def cache(self) -> LookupCache:
        return self._cache

    # -- Public API ---------------------------------------------------------

    async def discover(
        self,
        param_a: int,
        param_b: int,
        cancel_token: CancelToken | None = None,
    ) -> list[ClassificationResult]:
        """Return one result per distinct non-empty label, ordered by point.

        Raises:
            InvalidInput: If either parameter is missing or out of range.
            RemoteError: If any remote lookup fails.
            Cancelled: If ``cancel_token`` is cancelled before completion.
        """
        _validate_params(param_a, param_b)
        session = DiscoverySession(param_a, param_b, cancel_token or CancelToken())

        try:
            coarse = coarse_points(self._coarse_step)
            await self._resolve(session, coarse)

            ranges = detect_boundaries(coarse, session.results)
            logger.debug("Found %d boundary ranges for (%s, %s)", len(ranges), param_a, param_b)

            refine = [point for r in ranges for point in r.interior() if point not in session.results]
            await self._resolve(session, list(dict.fromkeys(refine)))
        except Cancelled:
            logger.info(
                "Discovery for (%s, %s) cancelled after %d remote calls",
                param_a,
                param_b,
                session.remote_calls,
            )
            raise

        distinct = collect_distinct(session.results)
        logger.info(
            "Discovered %d distinct labels for (%s, %s) with %d boundary ranges and %d remote calls",
            len(distinct),
            param_a,
            param_b,
            len(ranges),
            session.remote_calls,
        )
        return distinct

    async def lookup(self, point: int, param_a: int, param_b: int) -> ClassificationResult:
        """Classify a single point, using the cache when possible."""
        _validate_params(param_a, param_b)
        _validate_point(point)
        key = QueryKey(point, param_a, param_b)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        return await self._fetch(key)

    async def lookup_many(
        self,
        points: Sequence[int],
        param_a: int,
        param_b: int,
        cancel_token: CancelToken | None = None,
    ) -> list[ClassificationResult]:
        """Classify arbitrary points in bounded batches; results follow ``points`` order."""
        _validate_params(param_a, param_b)
        for point in points:
            _validate_point(point)
        session = DiscoverySession(param_a, param_b, cancel_token or CancelToken())
        await self._resolve(session, list(dict.fromkeys(points)))
        return [session.results[point] for point in points]

    def is_cached(self, points: Iterable[int], param_a: int, param_b: int) -> bool:
        """True when every point is already cached for the parameter pair."""
        return self._cache.has_all(QueryKey(point, param_a, param_b) for point in points)

    # -- Internal -----------------------------------------------------------

    async def _resolve(self, session: DiscoverySession, points: list[int]) -> None:
        token = session.token
        token.raise_if_cancelled()

        pending: list[int] = []
        for point in points:
            cached = self._cache.get(session.key(point))
            if cached is not None:
                session.results[point] = cached
            else:
                pending.append(point)

        for offset in range(0, len(pending), self._batch_size):
            batch = pending[offset : offset + self._batch_size]
            token.raise_if_cancelled()

            logger.debug("Dispatching %d lookups for (%s, %s)", len(batch), session.param_a, session.param_b)
            outcomes = await asyncio.gather(
                *(self._fetch(session.key(point)) for point in batch),
                return_exceptions=True,
            )
            session.remote_calls += len(batch)

            for point, outcome in zip(batch, outcomes, strict=True):
                if isinstance(outcome, BaseException):
                    logger.warning(
                        "Lookup of point %s for (%s, %s) failed: %s",
                        point,
                        session.param_a,
                        session.param_b,
                        outcome,
                    )
                    raise outcome
                session.results[point] = outcome

            token.raise_if_cancelled()

    async def _fetch(self, key: QueryKey) -> ClassificationResult:
        result = await self._classifier.classify(key.point, key.param_a, key.param_b)
        return self._cache.put(key, result)


def _validate_params(param_a: int, param_b: int) -> None:
    for name, value in (("param_a", param_a), ("param_b", param_b)):
        if value is None:
            raise InvalidInput(f"{name} is required")
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInput(f"{name} must be an integer, got {value!r}")
        if not PARAM_MIN <= value <= PARAM_MAX:
            raise InvalidInput(f"{name} must be in {PARAM_MIN}..{PARAM_MAX}, got {value}")


def _validate_point(point: int) -> None:
    if isinstance(point, bool) or not isinstance(point, int) or not 0 <= point < DOMAIN_SIZE:
        raise InvalidInput(f"point must be an integer in 0..{DOMAIN_SIZE - 1}, got {point!r}")
