"""
Runs the external crawler and downloader as child processes.

Children are terminated when the awaiting task is cancelled (Ctrl-C), and
SIGTERM received by this process is forwarded to them while they run.
"""

import asyncio
import contextlib
import logging
import shutil
import signal
from collections.abc import AsyncIterator, Iterable, Iterator, Sequence

from parallel_aria2.exceptions import DependencyError
from parallel_aria2.utils.formatting import redact_command

log = logging.getLogger(__name__)

TERMINATE_GRACE_S = 5.0


def check_commands(commands: Iterable[str]) -> None:
    """Raises DependencyError for the first command that is not in PATH."""
    for cmd in commands:
        if shutil.which(cmd) is None:
            raise DependencyError(f"Required command '{cmd}' not found in PATH.")


def _signal_child(proc: asyncio.subprocess.Process, sig: int) -> None:
    if proc.returncode is None:
        log.debug(f"Forwarding signal {sig} to child process {proc.pid}")
        with contextlib.suppress(ProcessLookupError):
            proc.send_signal(sig)


@contextlib.contextmanager
def _forward_termination(proc: asyncio.subprocess.Process) -> Iterator[None]:
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGTERM, _signal_child, proc, signal.SIGTERM)
    except (NotImplementedError, RuntimeError, ValueError):
        # Not available on Windows loops or outside the main thread.
        installed = False
    else:
        installed = True
    try:
        yield
    finally:
        if installed:
            loop.remove_signal_handler(signal.SIGTERM)


async def _terminate(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is not None:
        return
    log.debug(f"Terminating child process {proc.pid}")
    with contextlib.suppress(ProcessLookupError):
        proc.terminate()
    try:
        await asyncio.wait_for(proc.wait(), timeout=TERMINATE_GRACE_S)
    except asyncio.TimeoutError:
        with contextlib.suppress(ProcessLookupError):
            proc.kill()
        await proc.wait()


async def _spawn(cmd: Sequence[str], **kwargs) -> asyncio.subprocess.Process:
    log.debug(f"Running: {redact_command(cmd)}")
    try:
        return await asyncio.create_subprocess_exec(*cmd, **kwargs)
    except FileNotFoundError as e:
        raise DependencyError(f"Required command '{cmd[0]}' not found in PATH.") from e


async def stream_process_lines(cmd: Sequence[str]) -> AsyncIterator[str]:
    """
    Yields the merged stdout/stderr of a command line by line.
    The child's exit status is logged but not interpreted.
    """
    proc = await _spawn(
        cmd, stdout=asyncio.subprocess.PIPE, stderr=asyncio.subprocess.STDOUT
    )
    with _forward_termination(proc):
        try:
            if proc.stdout is None:
                raise RuntimeError(f"No output pipe for '{cmd[0]}'")
            async for raw_line in proc.stdout:
                yield raw_line.decode("utf-8", errors="replace").rstrip("\r\n")
            status = await proc.wait()
            log.debug(f"'{cmd[0]}' exited with status {status}")
        finally:
            await _terminate(proc)


async def run_process(cmd: Sequence[str]) -> int:
    """Runs a command attached to the terminal and returns its exit status."""
    proc = await _spawn(cmd)
    with _forward_termination(proc):
        try:
            return await proc.wait()
        finally:
            await _terminate(proc)
