"""Unit tests for InMemoryEventBus and LoggingEventHandler."""

from datetime import timedelta
from unittest.mock import Mock

import pytest
from uuid_extensions import uuid7

from eduguard.domain.events import (
    ALL_EVENT_TYPES,
    AccountLockedOut,
    AuthenticationAttempted,
    AuthenticationFailed,
    RoleDenied,
)
from eduguard.infrastructure.events.handlers.logging_event_handler import (
    LoggingEventHandler,
)
from eduguard.infrastructure.events.in_memory_event_bus import InMemoryEventBus
from tests.conftest import NOW


@pytest.mark.unit
class TestInMemoryEventBus:
    """Test routing and fail-open behaviour."""

    @pytest.mark.asyncio
    async def test_publish_without_handlers_is_noop(self):
        logger = Mock()
        bus = InMemoryEventBus(logger=logger)

        await bus.publish(AuthenticationAttempted(email="a@school.test"))

        logger.debug.assert_not_called()

    @pytest.mark.asyncio
    async def test_handlers_receive_event(self):
        bus = InMemoryEventBus(logger=Mock())
        received = []

        async def handler(event):
            received.append(event)

        bus.subscribe(AuthenticationAttempted, handler)
        event = AuthenticationAttempted(email="a@school.test")
        await bus.publish(event)

        assert received == [event]

    @pytest.mark.asyncio
    async def test_exact_type_routing(self):
        bus = InMemoryEventBus(logger=Mock())
        received = []

        async def handler(event):
            received.append(event)

        bus.subscribe(AuthenticationFailed, handler)
        await bus.publish(AuthenticationAttempted(email="a@school.test"))

        assert received == []

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_block_others(self):
        logger = Mock()
        bus = InMemoryEventBus(logger=logger)
        received = []

        async def broken(event):
            raise RuntimeError("audit store down")

        async def working(event):
            received.append(event)

        bus.subscribe(AuthenticationAttempted, broken)
        bus.subscribe(AuthenticationAttempted, working)
        await bus.publish(AuthenticationAttempted(email="a@school.test"))

        assert len(received) == 1
        logger.warning.assert_called_once()
        assert logger.warning.call_args.kwargs["error_message"] == "audit store down"

    @pytest.mark.asyncio
    async def test_metadata_visible_during_publish_only(self):
        bus = InMemoryEventBus(logger=Mock())
        seen = []

        async def handler(event):
            seen.append(bus.get_metadata())

        bus.subscribe(AuthenticationAttempted, handler)
        await bus.publish(
            AuthenticationAttempted(email="a@school.test"),
            metadata={"ip_address": "10.0.0.1"},
        )

        assert seen == [{"ip_address": "10.0.0.1"}]
        assert bus.get_metadata() == {}


@pytest.mark.unit
class TestLoggingEventHandler:
    """Test structured logging of events."""

    def test_register_subscribes_every_event(self):
        bus = InMemoryEventBus(logger=Mock())
        LoggingEventHandler(logger=Mock()).register(bus)

        for event_type in ALL_EVENT_TYPES:
            assert bus.handler_count(event_type) == 1

    @pytest.mark.asyncio
    async def test_lockout_logged_as_warning(self):
        logger = Mock()
        handler = LoggingEventHandler(logger=logger)
        account_id = uuid7()

        await handler.handle_account_locked_out(
            AccountLockedOut(
                occurred_at=NOW,
                account_id=account_id,
                locked_until=NOW + timedelta(minutes=15),
                failed_attempts=5,
            )
        )

        logger.warning.assert_called_once()
        args, kwargs = logger.warning.call_args
        assert args == ("account_locked_out",)
        assert kwargs["account_id"] == str(account_id)
        assert kwargs["failed_attempts"] == 5

    @pytest.mark.asyncio
    async def test_role_denied_logged(self):
        logger = Mock()
        handler = LoggingEventHandler(logger=logger)

        await handler.handle_role_denied(
            RoleDenied(
                account_id=uuid7(), role="student", allowed_roles=("teacher",)
            )
        )

        assert logger.warning.call_args.kwargs["allowed_roles"] == ["teacher"]
