"""Error taxonomy for discovery and remote lookups."""

from __future__ import annotations

from enum import StrEnum


class DiscoveryError(Exception):
    """Base class for discovery failures."""


class InvalidInput(DiscoveryError, ValueError):
    """A parameter or domain point is missing or out of range."""


class RemoteErrorKind(StrEnum):
    CONNECTION = "connection"
    STATUS = "status"
    MALFORMED = "malformed"


class RemoteError(DiscoveryError):
    """A single remote classification failed.

    ``kind`` separates connectivity problems from data-shape problems so the
    caller can decide whether a retry is worthwhile.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: RemoteErrorKind,
        point: int | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.point = point
        self.status_code = status_code


class Cancelled(Exception):  # noqa: N818
    """Discovery was cancelled through its token.

    Not a ``DiscoveryError``: a cancelled discovery is not a failure.
    """
