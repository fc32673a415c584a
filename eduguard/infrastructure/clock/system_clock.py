"""Clock adapters.

SystemClock reads the wall clock. FixedClock returns a settable instant and
backs deterministic tests and replaying scenarios.
"""

from datetime import UTC, datetime, timedelta


class SystemClock:
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock:
    """Clock pinned to an instant that only moves when told to.

    Args:
        instant: Starting time; must be timezone-aware.
    """

    def __init__(self, instant: datetime) -> None:
        if instant.tzinfo is None:
            raise ValueError("FixedClock requires a timezone-aware datetime")
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        """Jump to ``instant``."""
        self._instant = instant

    def advance(self, delta: timedelta) -> None:
        """Move forward by ``delta``."""
        self._instant = self._instant + delta
