"""
Discovers URLs by walking HTML directory listings (Apache, nginx autoindex,
lighttpd and similar) without any external crawler.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from urllib.parse import urldefrag, urljoin, urlparse

import aiohttp
from bs4 import BeautifulSoup

from parallel_aria2 import __version__
from parallel_aria2.exceptions import DiscoveryError
from parallel_aria2.models.config import Credentials

from .base import DiscoveryAdapter, require_urls, unique_in_order

log = logging.getLogger(__name__)

_SKIPPED_SCHEMES = ("mailto:", "javascript:", "data:")


@dataclass
class ListingLinks:
    """Links found on one listing page, split by kind."""

    directories: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)


def _directory_path(url: str) -> str:
    path = urlparse(url).path or "/"
    return path if path.endswith("/") else path + "/"


def extract_listing_links(html: str, page_url: str, root_url: str) -> ListingLinks:
    """
    Parses a directory listing page and returns the links that stay on the
    root's host and strictly below the root path.

    Sort-order links (anything with a query string), in-page anchors and
    'index.html*' pages are ignored.
    """
    root = urlparse(root_url)
    root_path = _directory_path(root_url)
    page_dir = _directory_path(page_url)
    links = ListingLinks()

    soup = BeautifulSoup(html, "html.parser")
    for anchor in soup.find_all("a", href=True):
        href = anchor["href"].strip()
        if not href or href.startswith("#") or href.lower().startswith(_SKIPPED_SCHEMES):
            continue

        absolute, fragment = urldefrag(urljoin(page_url, href))
        parsed = urlparse(absolute)
        if fragment or parsed.query:
            continue
        if parsed.scheme not in ("http", "https") or parsed.netloc != root.netloc:
            continue
        is_ancestor = parsed.path.endswith("/") and page_dir.startswith(parsed.path)
        if not parsed.path.startswith(root_path) or is_ancestor:
            continue

        name = parsed.path.rstrip("/").rsplit("/", 1)[-1]
        if name.startswith("index.html"):
            continue

        if parsed.path.endswith("/"):
            links.directories.append(absolute)
        else:
            links.files.append(absolute)
    return links


class ListingDiscovery(DiscoveryAdapter):
    """Breadth-first crawl of HTML index pages using aiohttp."""

    name = "listing"

    def __init__(self, max_pages: int = 10_000) -> None:
        self.max_pages = max_pages

    def _open_session(self, credentials: Credentials) -> aiohttp.ClientSession:
        auth = None
        if credentials is not None:
            auth = aiohttp.BasicAuth(credentials.username, credentials.password)
        timeout = aiohttp.ClientTimeout(total=None, sock_connect=15, sock_read=90)
        return aiohttp.ClientSession(
            auth=auth,
            timeout=timeout,
            headers={"User-Agent": f"parallel-aria2/{__version__}"},
        )

    async def _fetch_listing(
        self, session: aiohttp.ClientSession, url: str
    ) -> tuple[str, str] | None:
        """
        Returns (final_url, html) for a listing page, or None when the
        response is not HTML.
        """
        async with session.get(url, allow_redirects=True) as response:
            response.raise_for_status()
            if "html" not in response.headers.get("Content-Type", "text/html"):
                return None
            return str(response.url), await response.text(errors="replace")

    async def crawl(self, session: aiohttp.ClientSession, root_url: str) -> list[str]:
        """Walks every listing below the root and returns file URLs in BFS order."""
        queue = deque([root_url])
        visited: set[str] = set()
        files: list[str] = []

        while queue and len(visited) < self.max_pages:
            url = queue.popleft()
            if url in visited:
                continue
            visited.add(url)

            try:
                page = await self._fetch_listing(session, url)
            except aiohttp.ClientError as e:
                if url == root_url:
                    raise DiscoveryError(
                        f"Could not read the listing at '{root_url}': {e}"
                    ) from e
                log.warning(f"Skipping listing '{url}': {e}")
                continue
            if page is None:
                log.debug(f"Not an HTML listing, skipping: {url}")
                continue

            final_url, html = page
            links = extract_listing_links(html, final_url, root_url)
            log.debug(
                f"{url}: {len(links.directories)} directories, {len(links.files)} files"
            )
            files.extend(links.files)
            queue.extend(d for d in links.directories if d not in visited)

        if queue and len(visited) >= self.max_pages:
            log.warning(f"Stopped after {self.max_pages} listing pages.")
        return unique_in_order(files)

    async def discover(self, root_url: str, credentials: Credentials) -> list[str]:
        async with self._open_session(credentials) as session:
            urls = await self.crawl(session, root_url)
        return require_urls(urls, root_url)
