"""
Utilities for turning discovered URLs into local directory layouts.
"""

import posixpath
from collections.abc import Iterable
from pathlib import Path

from parallel_aria2.models.entry import RelativeEntry

_REJECTED_FILE_NAMES = ("", ".", "/")


def normalize_url_path(url: str) -> str:
    """
    Strips the query string, the scheme and the host from a URL, leaving the
    path without its leading slash.

    Malformed input is never an error. Each step only applies when its marker
    is present, so 'foo/bar' gives 'bar' and 'https://host' gives 'host'.
    """
    path, _, _ = url.partition("?")
    if "://" in path:
        path = path.split("://", 1)[1]
    if "/" in path:
        path = path.split("/", 1)[1]
    return path


def compute_base_path(root_url: str) -> str:
    """Returns the normalized root path, always terminated by '/'."""
    base_path = normalize_url_path(root_url)
    if not base_path.endswith("/"):
        base_path += "/"
    return base_path


def join_local_dir(download_root: str, relative_dir: str) -> str:
    """Places a relative directory under the download root."""
    if relative_dir in ("", "."):
        return download_root
    return f"{download_root}/{relative_dir}"


def map_entry(
    discovered_url: str, base_path: str, download_root: str
) -> RelativeEntry | None:
    """
    Maps a discovered URL to its manifest entry.

    URLs outside the base path (e.g. after a redirect) keep their full path.
    Returns None for directory-listing artifacts that have no file name.
    """
    url_path = normalize_url_path(discovered_url)
    rel = url_path[len(base_path) :] if url_path.startswith(base_path) else url_path

    relative_dir, file_name = posixpath.split(rel)
    if file_name in _REJECTED_FILE_NAMES:
        return None

    relative_dir = relative_dir.rstrip("/") or "."
    return RelativeEntry(
        remote_url=discovered_url,
        relative_dir=relative_dir,
        file_name=file_name,
        local_dir=join_local_dir(download_root, relative_dir),
    )


def map_entries(
    urls: Iterable[str], base_path: str, download_root: str
) -> tuple[list[RelativeEntry], int]:
    """Maps URLs in order, returning the accepted entries and the skipped count."""
    entries: list[RelativeEntry] = []
    skipped = 0
    for url in urls:
        if not url:
            continue
        entry = map_entry(url, base_path, download_root)
        if entry is None:
            skipped += 1
            continue
        entries.append(entry)
    return entries, skipped


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)
