"""
Writes the aria2c input file and prepares the local directory layout.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from parallel_aria2.exceptions import FilesystemError
from parallel_aria2.models.entry import RelativeEntry
from parallel_aria2.utils.path import create_dir

log = logging.getLogger(__name__)


def ensure_download_root(download_root: str) -> None:
    """Creates the local root directory for the mirror."""
    try:
        create_dir(Path(download_root))
    except OSError as e:
        raise FilesystemError(
            f"Could not create download root directory '{download_root}': {e}"
        ) from e


class ManifestBuilder:
    """
    Builds the manifest from mapped entries.

    Each build truncates the file first, so re-running never accumulates
    entries from an earlier run. Concurrent builds into the same download
    root are not supported.
    """

    def __init__(self, manifest_path: Path) -> None:
        self.manifest_path = manifest_path
        self.directories_created = 0

    def _ensure_dir(self, local_dir: str, seen: set[str]) -> None:
        if local_dir in seen:
            return
        try:
            create_dir(Path(local_dir))
        except OSError as e:
            raise FilesystemError(
                f"Could not create directory '{local_dir}': {e}"
            ) from e
        seen.add(local_dir)
        self.directories_created += 1
        log.debug(f"Prepared directory {local_dir}")

    def build(self, entries: Iterable[RelativeEntry]) -> int:
        """
        Writes one URL/dir block per entry in input order and returns the
        number of entries written.
        """
        seen: set[str] = set()
        self.directories_created = 0
        count = 0
        try:
            with open(self.manifest_path, "w", encoding="utf-8", newline="\n") as f:
                for entry in entries:
                    self._ensure_dir(entry.local_dir, seen)
                    f.write(entry.manifest_block())
                    count += 1
        except OSError as e:
            raise FilesystemError(
                f"Could not write manifest '{self.manifest_path}': {e}"
            ) from e
        log.debug(f"Wrote {count} entries to {self.manifest_path}")
        return count
