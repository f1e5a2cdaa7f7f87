"""Time sources. Services take one of these instead of reading the wall clock."""
from datetime import datetime, timezone


class SystemClock:
    def now(self):
        return datetime.now(timezone.utc)


class FixedClock:
    """Always returns the same instant; advance() moves it forward."""

    def __init__(self, instant):
        self._instant = instant

    def now(self):
        return self._instant

    def advance(self, delta):
        self._instant = self._instant + delta


def timestamp(clock):
    """ISO-8601 string for storage. Sorts chronologically."""
    return clock.now().isoformat(timespec='microseconds')
