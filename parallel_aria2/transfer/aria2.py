"""
Runs aria2c against the generated input file.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path

from parallel_aria2.models.config import Credentials
from parallel_aria2.utils.process import run_process

log = logging.getLogger(__name__)

# -x8: connections per server, -j12: parallel downloads, -c: continue partial
# downloads, -m0: unlimited retries.
DEFAULT_ARIA2_OPTIONS = ("-x8", "-j12", "-c", "-m0")


class Aria2Transfer:
    """Downloads every manifest entry into its bound directory with aria2c."""

    def __init__(
        self,
        executable: str = "aria2c",
        runner: Callable[[Sequence[str]], Awaitable[int]] = run_process,
    ) -> None:
        self.executable = executable
        self._runner = runner

    def build_command(
        self,
        manifest_path: Path,
        credentials: Credentials,
        extra_args: Sequence[str] = (),
    ) -> list[str]:
        """
        Caller-supplied arguments come last so they override the defaults;
        aria2c keeps the last value of a repeated option.
        """
        cmd = [self.executable, *DEFAULT_ARIA2_OPTIONS]
        if credentials is not None:
            cmd += [
                f"--http-user={credentials.username}",
                f"--http-passwd={credentials.password}",
            ]
        cmd += ["-V", "-i", str(manifest_path), *extra_args]
        return cmd

    async def transfer(
        self,
        manifest_path: Path,
        credentials: Credentials,
        extra_args: Sequence[str] = (),
    ) -> int:
        """Runs aria2c and returns its exit status untouched."""
        cmd = self.build_command(manifest_path, credentials, extra_args)
        status = await self._runner(cmd)
        log.debug(f"aria2c exited with status {status}")
        return status
