import asyncio
import contextlib

import aiohttp
import pytest

from parallel_aria2.discovery.listing import ListingDiscovery, extract_listing_links
from parallel_aria2.exceptions import DiscoveryError
from parallel_aria2.models.config import BasicCredentials

ROOT = "https://ex.com/data/"

APACHE_INDEX = """
<html><head><title>Index of /data</title></head><body>
<h1>Index of /data</h1>
<table>
<tr><th><a href="?C=N;O=D">Name</a></th><th><a href="?C=M;O=A">Last modified</a></th></tr>
<tr><td><a href="/">Parent Directory</a></td></tr>
<tr><td><a href="../">..</a></td></tr>
<tr><td><a href="a.txt">a.txt</a></td></tr>
<tr><td><a href="sub/">sub/</a></td></tr>
<tr><td><a href="index.html">index.html</a></td></tr>
<tr><td><a href="#top">top</a></td></tr>
<tr><td><a href="mailto:admin@ex.com">admin</a></td></tr>
<tr><td><a href="https://other.org/data/x.bin">mirror</a></td></tr>
<tr><td><a href="https://ex.com/data/b%20c.iso">b c.iso</a></td></tr>
</table></body></html>
"""

SUB_INDEX = """
<pre><a href="../">../</a>
<a href="b.txt">b.txt</a>
<a href="deeper/">deeper/</a>
</pre>
"""

DEEPER_INDEX = '<pre><a href="../">../</a><a href="c.txt">c.txt</a></pre>'


def test_extract_listing_links_filters_navigation_links():
    links = extract_listing_links(APACHE_INDEX, ROOT, ROOT)

    assert links.directories == ["https://ex.com/data/sub/"]
    assert links.files == [
        "https://ex.com/data/a.txt",
        "https://ex.com/data/b%20c.iso",
    ]


def test_extract_listing_links_stays_below_root():
    links = extract_listing_links(SUB_INDEX, "https://ex.com/data/sub/", ROOT)

    assert links.directories == ["https://ex.com/data/sub/deeper/"]
    assert links.files == ["https://ex.com/data/sub/b.txt"]


class PageMapDiscovery(ListingDiscovery):
    """Serves listing pages from a dict instead of the network."""

    def __init__(self, pages, failing=(), **kwargs):
        super().__init__(**kwargs)
        self.pages = pages
        self.failing = set(failing)
        self.fetched = []

    async def _fetch_listing(self, session, url):
        self.fetched.append(url)
        if url in self.failing:
            raise aiohttp.ClientConnectionError(f"cannot reach {url}")
        html = self.pages.get(url)
        if html is None:
            return None
        return url, html

    def _open_session(self, credentials):
        return contextlib.nullcontext(None)


def test_crawl_walks_listings_breadth_first():
    discovery = PageMapDiscovery(
        {
            ROOT: APACHE_INDEX,
            "https://ex.com/data/sub/": SUB_INDEX,
            "https://ex.com/data/sub/deeper/": DEEPER_INDEX,
        }
    )

    urls = asyncio.run(discovery.discover(ROOT, None))

    assert urls == [
        "https://ex.com/data/a.txt",
        "https://ex.com/data/b%20c.iso",
        "https://ex.com/data/sub/b.txt",
        "https://ex.com/data/sub/deeper/c.txt",
    ]
    assert discovery.fetched == [
        ROOT,
        "https://ex.com/data/sub/",
        "https://ex.com/data/sub/deeper/",
    ]


def test_crawl_skips_failing_sub_listing():
    discovery = PageMapDiscovery(
        {ROOT: APACHE_INDEX}, failing={"https://ex.com/data/sub/"}
    )

    urls = asyncio.run(discovery.discover(ROOT, None))

    assert urls == ["https://ex.com/data/a.txt", "https://ex.com/data/b%20c.iso"]


def test_crawl_root_failure_raises_discovery_error():
    discovery = PageMapDiscovery({}, failing={ROOT})

    with pytest.raises(DiscoveryError):
        asyncio.run(discovery.discover(ROOT, None))


def test_empty_listing_raises_discovery_error():
    discovery = PageMapDiscovery({ROOT: "<html><body>Nothing here</body></html>"})

    with pytest.raises(DiscoveryError):
        asyncio.run(discovery.discover(ROOT, None))


def test_crawl_respects_page_limit():
    discovery = PageMapDiscovery(
        {ROOT: APACHE_INDEX, "https://ex.com/data/sub/": SUB_INDEX}, max_pages=1
    )

    urls = asyncio.run(discovery.discover(ROOT, None))

    assert discovery.fetched == [ROOT]
    assert "https://ex.com/data/sub/b.txt" not in urls


def test_open_session_uses_basic_auth():
    async def _check():
        creds = BasicCredentials(username="alice", password="s3cret")
        async with ListingDiscovery()._open_session(creds) as session:
            return session.auth

    auth = asyncio.run(_check())

    assert auth == aiohttp.BasicAuth("alice", "s3cret")


def test_open_session_anonymous():
    async def _check():
        async with ListingDiscovery()._open_session(None) as session:
            return session.auth

    assert asyncio.run(_check()) is None
