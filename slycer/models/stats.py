"""
Dataclass for tracking split session statistics.
"""

import time
from dataclasses import dataclass, field


@dataclass
class SessionStats:
    """Tracks what a session did with each URL and chapter."""

    urls_processed: int = 0
    urls_failed: int = 0
    urls_skipped: int = 0
    chapters_split: int = 0
    chapters_skipped: int = 0
    tracks_tagged: int = 0
    failures: list[str] = field(default_factory=list)
    start_time: float = field(default_factory=time.monotonic, repr=False)

    def record_failure(self, url: str, error: Exception) -> None:
        self.urls_failed += 1
        self.failures.append(f"{url}: {error}")

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.start_time
