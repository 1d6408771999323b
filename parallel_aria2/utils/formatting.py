"""
Helper functions for formatting data into human-readable strings.
"""

import shlex
from collections.abc import Sequence


def format_duration(seconds: float) -> str:
    """
    Formats a duration in seconds into a human-readable string (e.g., '2h 34m 12s').
    """
    s = int(seconds)
    hours, remainder = divmod(s, 3600)
    minutes, secs = divmod(remainder, 60)
    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)


def redact_command(cmd: Sequence[str]) -> str:
    """Renders a command line for logs with password flags masked."""
    masked = []
    for arg in cmd:
        flag, sep, _ = arg.partition("=")
        if sep and flag in ("--password", "--http-passwd"):
            arg = f"{flag}=***"
        masked.append(arg)
    return shlex.join(masked)
