"""Clock protocol.

Every time-dependent rule (lockout expiry, grant expiry, age of digital
consent) reads the time from an injected clock so tests can pin it.
"""

from datetime import datetime
from typing import Protocol


class ClockProtocol(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        """Current time as a timezone-aware UTC datetime."""
        ...
