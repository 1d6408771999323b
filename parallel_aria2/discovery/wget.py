"""
Discovers URLs by running wget in spider mode and scanning its log output.
"""

import logging
import re
from collections.abc import AsyncIterator, Callable, Iterable, Sequence

from parallel_aria2.models.config import Credentials
from parallel_aria2.utils.process import stream_process_lines

from .base import DiscoveryAdapter, require_urls, unique_in_order

log = logging.getLogger(__name__)

_URL_PREFIX_REGEX = re.compile(r"^https?://")

# Recursive, no parent, no payload download; auto-generated index pages skipped.
WGET_SPIDER_OPTIONS = (
    "-r",
    "-np",
    "-nH",
    "--cut-dirs=1",
    "--reject",
    "index.html*",
    "--spider",
)


def parse_spider_line(line: str) -> str | None:
    """
    Extracts the URL from a wget request line such as
    '--2024-05-01 10:00:00--  https://host/path/file.txt'.
    """
    if not line.startswith("--"):
        return None
    tokens = line.split()
    if len(tokens) < 3:
        return None
    candidate = tokens[2]
    if not _URL_PREFIX_REGEX.match(candidate):
        return None
    return candidate


def parse_spider_output(lines: Iterable[str]) -> list[str]:
    """Collects candidate URLs from wget output, first occurrence wins."""
    return unique_in_order(
        url for url in map(parse_spider_line, lines) if url is not None
    )


class WgetSpiderDiscovery(DiscoveryAdapter):
    """Runs `wget --spider` against the root URL and collects every URL it requests."""

    name = "wget"

    def __init__(
        self,
        executable: str = "wget",
        line_source: Callable[[Sequence[str]], AsyncIterator[str]] = stream_process_lines,
    ) -> None:
        self.executable = executable
        self._line_source = line_source

    def build_command(self, root_url: str, credentials: Credentials) -> list[str]:
        cmd = [self.executable]
        if credentials is not None:
            cmd += [
                f"--user={credentials.username}",
                f"--password={credentials.password}",
            ]
        cmd += [*WGET_SPIDER_OPTIONS, root_url]
        return cmd

    async def discover(self, root_url: str, credentials: Credentials) -> list[str]:
        cmd = self.build_command(root_url, credentials)
        lines = []
        async for line in self._line_source(cmd):
            log.debug(f"wget: {line}")
            lines.append(line)
        urls = parse_spider_output(lines)
        log.debug(f"wget reported {len(urls)} unique URLs")
        return require_urls(urls, root_url)
