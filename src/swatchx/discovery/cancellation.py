"""Cooperative cancellation tokens and supersession of discoveries."""

from __future__ import annotations

import logging
import threading

from swatchx.discovery.errors import Cancelled

logger = logging.getLogger(__name__)


class CancelToken:
    """A flag checked by the engine at batch boundaries.

    Cancelling never interrupts a lookup that is already in flight.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: str | None = None

    def cancel(self, reason: str | None = None) -> None:
        if not self._cancelled:
            self._cancelled = True
            self._reason = reason

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> str | None:
        return self._reason

    def raise_if_cancelled(self) -> None:
        """Raise ``Cancelled`` if the token has been cancelled."""
        if self._cancelled:
            raise Cancelled(self._reason or "Discovery cancelled")


class DiscoveryRegistry:
    """Tracks the live token per caller session.

    Starting a discovery under a session id that already has one in flight
    cancels the older token, so only the most recent parameters win.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tokens: dict[str, CancelToken] = {}

    def begin(self, session_id: str) -> CancelToken:
        """Register a fresh token for ``session_id``, cancelling any prior one."""
        token = CancelToken()
        with self._lock:
            previous = self._tokens.get(session_id)
            self._tokens[session_id] = token
        if previous is not None:
            previous.cancel("Superseded by a newer discovery")
            logger.info("Superseded in-flight discovery for session %s", session_id)
        return token

    def finish(self, session_id: str, token: CancelToken) -> None:
        """Forget ``token`` if it is still the live one for ``session_id``."""
        with self._lock:
            if self._tokens.get(session_id) is token:
                del self._tokens[session_id]

    @property
    def in_flight(self) -> int:
        """Number of sessions with a registered discovery."""
        with self._lock:
            return len(self._tokens)
