"""
A small thread-safe rolling window of the most recent log lines.
"""

import threading
from collections import deque

DEFAULT_CAPACITY = 5


class RecentLines:
    """
    Keeps the last `capacity` lines seen by the output tailers of one child
    process. Both tailers append concurrently; every append returns a snapshot
    taken under the same lock so callers can redraw without holding it.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("RecentLines capacity must be at least 1.")
        self.capacity = capacity
        self._lines: deque[str] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def append(self, line: str) -> list[str]:
        """Adds a line, evicting the oldest if full, and returns a snapshot."""
        with self._lock:
            self._lines.append(line)
            return list(self._lines)

    def snapshot(self) -> list[str]:
        """Returns the buffered lines, oldest first."""
        with self._lock:
            return list(self._lines)

    def clear(self) -> None:
        with self._lock:
            self._lines.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)
