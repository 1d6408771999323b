"""
Shared behaviour for discovery adapters.
"""

from collections.abc import Iterable

from parallel_aria2.exceptions import DiscoveryError
from parallel_aria2.models.config import Credentials


class DiscoveryAdapter:
    """Interface implemented by every discovery backend."""

    name = "base"

    async def discover(self, root_url: str, credentials: Credentials) -> list[str]:
        raise NotImplementedError


def unique_in_order(urls: Iterable[str]) -> list[str]:
    """Drops repeated URLs, keeping the first occurrence."""
    return list(dict.fromkeys(urls))


def require_urls(urls: list[str], root_url: str) -> list[str]:
    """Raises DiscoveryError when a crawl came back empty."""
    if not urls:
        raise DiscoveryError(
            f"No URLs were discovered under '{root_url}'. "
            "Check your URL, credentials, or crawler options; "
            "an empty directory tree looks the same."
        )
    return urls
