"""Event bus protocol (port) for domain events.

Implementations:
    - InMemoryEventBus: eduguard/infrastructure/events/in_memory_event_bus.py

Usage:
    >>> event_bus = get_event_bus()
    >>> event_bus.subscribe(AccountLockedOut, notify_security_team)
    >>> await event_bus.publish(AccountLockedOut(account_id=..., ...))
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from eduguard.domain.events.base_event import DomainEvent

EventHandler = Callable[[DomainEvent], Awaitable[None]]
"""Async handler receiving a single event and returning None."""


class EventBusProtocol(Protocol):
    """Publisher-subscriber contract for domain events.

    Key Requirements:
        1. **Fail-open**: one handler failure must NOT prevent the others
           from running, and must never reach the publisher.
        2. **Async**: handlers are coroutines.
        3. **Exact type routing**: handlers receive only the event type they
           subscribed to.
        4. **No ordering**: handlers may run concurrently.
    """

    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None:
        """Register ``handler`` for ``event_type``."""
        ...

    async def publish(
        self,
        event: DomainEvent,
        metadata: dict[str, str] | None = None,
    ) -> None:
        """Publish ``event`` to all handlers registered for its type.

        Args:
            event: Domain event to publish.
            metadata: Optional request metadata (ip_address, user_agent) for
                audit enrichment.
        """
        ...
