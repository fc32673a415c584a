"""In-memory event bus implementation.

Dictionary-based registry implementing EventBusProtocol. Suitable for a
single process; an audit-log collaborator subscribes here to persist
authorization events.

Architecture:
    - Exact type routing (event_type → list of handlers)
    - Fail-open (one handler failure doesn't break others)
    - Concurrent handler execution (asyncio.gather)
"""

import asyncio
from collections import defaultdict

from eduguard.domain.events.base_event import DomainEvent
from eduguard.domain.protocols.event_bus_protocol import EventHandler
from eduguard.domain.protocols.logger_protocol import LoggerProtocol


class InMemoryEventBus:
    """In-memory event bus with fail-open behavior.

    Not thread-safe; designed for a single event loop.

    Attributes:
        _handlers: Event class → async handlers.
        _logger: Logger for handler failures and publishing.

    Example:
        >>> bus = InMemoryEventBus(logger=logger)
        >>> bus.subscribe(AccountLockedOut, audit_handler.record)
        >>> await bus.publish(AccountLockedOut(account_id=..., ...))
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandler]] = defaultdict(list)
        self._logger = logger
        self._metadata: dict[str, str] = {}

    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None:
        """Register ``handler`` for exact ``event_type`` (no subclass matching)."""
        self._handlers[event_type].append(handler)

    def handler_count(self, event_type: type[DomainEvent]) -> int:
        """Number of handlers registered for ``event_type``."""
        return len(self._handlers.get(event_type, []))

    def get_metadata(self) -> dict[str, str]:
        """Request metadata passed with the event currently being published."""
        return dict(self._metadata)

    async def publish(
        self,
        event: DomainEvent,
        metadata: dict[str, str] | None = None,
    ) -> None:
        """Publish event to all registered handlers.

        Handler exceptions are logged at warning level and never propagated.
        With no handlers registered this is a no-op.
        """
        event_type = type(event)
        handlers = self._handlers.get(event_type, [])

        if not handlers:
            return

        self._logger.debug(
            "event_publishing",
            event_type=event_type.__name__,
            event_id=str(event.event_id),
            handler_count=len(handlers),
        )

        self._metadata = metadata or {}
        try:
            results = await asyncio.gather(
                *(handler(event) for handler in handlers),
                return_exceptions=True,
            )
        finally:
            self._metadata = {}

        for idx, result in enumerate(results):
            if isinstance(result, Exception):
                handler_name = getattr(handlers[idx], "__name__", repr(handlers[idx]))
                self._logger.warning(
                    "event_handler_failed",
                    event_type=event_type.__name__,
                    event_id=str(event.event_id),
                    handler_name=handler_name,
                    error_type=type(result).__name__,
                    error_message=str(result),
                )
