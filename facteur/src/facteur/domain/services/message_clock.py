"""
Server-side clock for message timestamps.
"""

from datetime import datetime, timedelta
from threading import Lock
from typing import Callable, Optional, Tuple


class MessageClock:
    """
    Strictly monotonic timestamp source for one process.

    Wall-clock readings that do not move forward (same tick, or the system
    clock stepping back) are bumped by one microsecond past the previous
    value. Every reading also carries an increasing sequence number.
    """

    _STEP = timedelta(microseconds=1)

    def __init__(self, now: Optional[Callable[[], datetime]] = None):
        self._now = now or datetime.utcnow
        self._last: Optional[datetime] = None
        self._sequence = 0
        self._lock = Lock()

    def next(self) -> Tuple[datetime, int]:
        """Return the next (timestamp, sequence) pair."""
        with self._lock:
            current = self._now()
            if self._last is not None and current <= self._last:
                current = self._last + self._STEP
            self._last = current
            self._sequence += 1
            return current, self._sequence
