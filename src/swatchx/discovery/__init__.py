"""Adaptive distinct-label discovery over a cyclic domain."""

from swatchx.discovery.cache import LookupCache, QueryKey
from swatchx.discovery.cancellation import CancelToken, DiscoveryRegistry
from swatchx.discovery.classifier import UNNAMED, ClassificationResult, RemoteClassifier
from swatchx.discovery.engine import (
    AdaptiveDiscoveryEngine,
    BoundaryRange,
    coarse_points,
    collect_distinct,
    detect_boundaries,
    generate_points,
)
from swatchx.discovery.errors import Cancelled, DiscoveryError, InvalidInput, RemoteError, RemoteErrorKind

__all__ = [
    "UNNAMED",
    "AdaptiveDiscoveryEngine",
    "BoundaryRange",
    "CancelToken",
    "Cancelled",
    "ClassificationResult",
    "DiscoveryError",
    "DiscoveryRegistry",
    "InvalidInput",
    "LookupCache",
    "QueryKey",
    "RemoteClassifier",
    "RemoteError",
    "RemoteErrorKind",
    "coarse_points",
    "collect_distinct",
    "detect_boundaries",
    "generate_points",
]
