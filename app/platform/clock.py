"""
Injectable clock.

Stores read time through a Clock so that expiry and activity windows can be
driven deterministically in tests. Timestamps are epoch milliseconds, the unit
the viewers and phones exchange on the wire.
"""

import time
from datetime import datetime


class Clock:
    """Wall clock backed by the system time."""

    def now_ms(self) -> int:
        return int(time.time() * 1000)

    def current_hour(self) -> int:
        """Local hour of day (0-23) at the current instant."""
        return datetime.fromtimestamp(self.now_ms() / 1000).hour


class FrozenClock(Clock):
    """
    Manually advanced clock.

    Time only moves through `advance()` or `set()`.
    """

    def __init__(self, start_ms: int = 0, hour: int | None = None):
        self._now_ms = start_ms
        self._hour = hour

    def now_ms(self) -> int:
        return self._now_ms

    def current_hour(self) -> int:
        if self._hour is not None:
            return self._hour
        return super().current_hour()

    def advance(self, seconds: float) -> int:
        self._now_ms += round(seconds * 1000)
        return self._now_ms

    def set(self, now_ms: int) -> None:
        self._now_ms = now_ms
