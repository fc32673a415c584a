"""Clock adapters."""

from eduguard.infrastructure.clock.system_clock import FixedClock, SystemClock

__all__ = ["FixedClock", "SystemClock"]
