"""
Drives a complete mirror run: discover, map, write the manifest, transfer.
"""

import logging

from rich.console import Console

from parallel_aria2.discovery import DiscoveryAdapter, create_discovery
from parallel_aria2.exceptions import ManifestEmptyError, TransferError
from parallel_aria2.models.config import RunConfig
from parallel_aria2.models.stats import SessionStats
from parallel_aria2.transfer import Aria2Transfer
from parallel_aria2.utils.path import compute_base_path, map_entries
from parallel_aria2.utils.process import check_commands

from .manifest import ManifestBuilder, ensure_download_root

log = logging.getLogger(__name__)


class MirrorSession:
    """
    Runs the pipeline once for a RunConfig. Each stage is sequential; the only
    parallelism lives inside aria2c.
    """

    def __init__(
        self,
        config: RunConfig,
        discovery: DiscoveryAdapter | None = None,
        transfer: Aria2Transfer | None = None,
        console: Console | None = None,
    ) -> None:
        self.config = config
        self.discovery = discovery or create_discovery(config.discovery_backend)
        self.transfer = transfer or Aria2Transfer()
        self.console = console or Console()
        self.stats = SessionStats()

    def _say(self, message: str) -> None:
        # URLs and paths may contain square brackets; print them verbatim.
        self.console.print(message, markup=False, highlight=False)

    async def run(self) -> int:
        """
        Executes the run and returns aria2c's exit status.

        Raises:
            DependencyError, DiscoveryError, FilesystemError, ManifestEmptyError:
                on the corresponding fatal condition.
            TransferError: if aria2c exits with a non-zero status.
        """
        config = self.config
        try:
            check_commands(config.required_commands)

            self._say(f"[*] Building URL list from: {config.root_url}")
            self._say(f"[*] Output aria2c input file: {config.manifest_path}")
            self._say(f"[*] Download root directory: {config.download_root}")
            if config.discovery_backend != "wget":
                self._say(f"[*] Discovery backend: {config.discovery_backend}")

            ensure_download_root(config.download_root)
            base_path = compute_base_path(config.root_url)
            log.debug(f"Base path: {base_path!r}")

            urls = await self.discovery.discover(config.root_url, config.credentials)
            self.stats.urls_discovered = len(urls)

            entries, skipped = map_entries(urls, base_path, config.download_root)
            self.stats.urls_skipped = skipped
            if skipped:
                log.debug(f"Skipped {skipped} URLs without a file name")

            builder = ManifestBuilder(config.manifest_path)
            count = builder.build(entries)
            self.stats.entries_accepted = count
            self.stats.directories_created = builder.directories_created
            if count == 0:
                raise ManifestEmptyError(
                    f"aria2c input file '{config.manifest_path}' is empty after "
                    "processing URLs."
                )

            self._say(f"[*] Prepared {count} entries for aria2c.")
            self._say("[*] Starting aria2c parallel download...")

            status = await self.transfer.transfer(
                config.manifest_path,
                config.credentials,
                config.extra_downloader_args,
            )
            self.stats.transfer_status = status
        finally:
            self.stats.finish()

        if status != 0:
            raise TransferError(status)
        return status
