"""Event bus dependency factory.

Application-scoped singleton for domain event publishing. The logging
handler is subscribed to every event at start-up; an audit store subscribes
to the same events through get_event_bus().subscribe(...).
"""

from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from eduguard.domain.protocols import EventBusProtocol


@lru_cache()
def get_event_bus() -> "EventBusProtocol":
    """Get event bus singleton (app-scoped).

    Usage:
        event_bus = get_event_bus()
        await event_bus.publish(AccountRegistered(...))
    """
    from eduguard.core.container.infrastructure import get_logger
    from eduguard.infrastructure.events.handlers.logging_event_handler import (
        LoggingEventHandler,
    )
    from eduguard.infrastructure.events.in_memory_event_bus import InMemoryEventBus

    logger = get_logger()
    event_bus = InMemoryEventBus(logger=logger)
    LoggingEventHandler(logger=logger).register(event_bus)
    return event_bus
