"""
Dataclass for tracking mirror session statistics.
"""

import time
from dataclasses import dataclass, field


@dataclass
class SessionStats:
    """Counters collected while a mirror session runs."""

    urls_discovered: int = 0
    entries_accepted: int = 0
    urls_skipped: int = 0
    directories_created: int = 0
    transfer_status: int | None = None
    _started_at: float = field(default_factory=time.monotonic, repr=False)
    _finished_at: float | None = field(default=None, repr=False)

    def finish(self) -> None:
        self._finished_at = time.monotonic()

    @property
    def duration_s(self) -> float:
        end = self._finished_at if self._finished_at is not None else time.monotonic()
        return end - self._started_at
