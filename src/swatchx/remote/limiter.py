"""Outbound request concurrency layer.

Architecture:
    discover() batches -> asyncio.Semaphore(N) -> httpx.AsyncClient

Batches from concurrent discoveries share one semaphore, so the service never
holds more than ``max_concurrent`` requests open against the remote API.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RequestLimiter:
    """Bounds concurrent outbound requests and reports their counts."""

    def __init__(self, max_concurrent: int) -> None:
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._active_count: int = 0
        self._queue_depth: int = 0

    async def run(self, func: Callable[..., Awaitable[T]], *args: object) -> T:
        """Await ``func(*args)`` once a semaphore slot is free."""
        self._queue_depth += 1
        try:
            await self._semaphore.acquire()
        finally:
            self._queue_depth -= 1

        self._active_count += 1
        try:
            return await func(*args)
        finally:
            self._semaphore.release()
            self._active_count -= 1

    @property
    def active_count(self) -> int:
        """Number of requests currently in flight."""
        return self._active_count

    @property
    def queue_depth(self) -> int:
        """Number of requests waiting for a slot."""
        return self._queue_depth
