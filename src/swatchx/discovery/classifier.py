"""Classification result record and the remote classifier protocol."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

DOMAIN_SIZE: int = 360
UNNAMED: str = "Unnamed"


@dataclass(frozen=True)
class ClassificationResult:
    """The label a remote classifier assigned to one domain point.

    ``payload`` is passed through untouched; only ``label`` is inspected.
    """

    point: int
    param_a: int
    param_b: int
    label: str
    payload: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def has_label(self) -> bool:
        """False for empty or sentinel labels."""
        return bool(self.label) and self.label != UNNAMED


class RemoteClassifier(Protocol):
    """Protocol for single-point remote classification."""

    async def classify(self, point: int, param_a: int, param_b: int) -> ClassificationResult:
        """Classify one domain point.

        Args:
            point: Domain point in [0, 360).
            param_a: First auxiliary parameter (saturation).
            param_b: Second auxiliary parameter (lightness).

        Raises:
            RemoteError: On network failure, non-success status, or a
                malformed response payload.
        """
        ...
