"""Event handlers subscribed at container start-up."""

from eduguard.infrastructure.events.handlers.logging_event_handler import (
    LoggingEventHandler,
)

__all__ = ["LoggingEventHandler"]
