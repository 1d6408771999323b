"""
Discovery Layer.

This package finds the file URLs reachable from the root URL, either by
running wget in spider mode or by walking HTML directory listings directly.
"""

from parallel_aria2.models.config import DiscoveryBackend

from .base import DiscoveryAdapter
from .listing import ListingDiscovery
from .wget import WgetSpiderDiscovery


def create_discovery(backend: DiscoveryBackend) -> DiscoveryAdapter:
    """Returns the discovery adapter for the configured backend."""
    if backend == "listing":
        return ListingDiscovery()
    return WgetSpiderDiscovery()


__all__ = [
    "DiscoveryAdapter",
    "ListingDiscovery",
    "WgetSpiderDiscovery",
    "create_discovery",
]
