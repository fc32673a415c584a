"""Unit tests for AuthenticateAccountHandler (credential and lockout state machine).

Tests cover:
- Successful authentication (counter reset, last login stamped, persisted)
- Unknown email (no attempts_remaining, no mutation)
- Wrong password (counter, attempts remaining)
- Fifth failure locks the account
- Locked account rejected even with the right password
- Expired lock reset on the next attempt
- Event publishing (ATTEMPTED, SUCCEEDED, FAILED, LOCKED_OUT, LOCK_EXPIRED)

Architecture:
- Mock repository protocol (AsyncMock) and password service (Mock)
- Real Account entities so state transitions are observable
- FixedClock for deterministic lock timing
"""

from datetime import timedelta
from unittest.mock import AsyncMock, Mock

import pytest

from eduguard.application.commands.auth_commands import AuthenticateAccount
from eduguard.application.commands.handlers import AuthenticateAccountHandler
from eduguard.core.result import Failure, Success
from eduguard.domain.errors import AccountLocked, InvalidCredentials
from eduguard.domain.events import (
    AccountLockedOut,
    AccountLockExpired,
    AuthenticationAttempted,
    AuthenticationFailed,
    AuthenticationSucceeded,
)
from eduguard.infrastructure.clock.system_clock import FixedClock
from tests.conftest import NOW, create_account


def make_handler(account, password_ok: bool, clock: FixedClock | None = None):
    account_repo = AsyncMock()
    account_repo.find_by_email_for_update.return_value = account

    password_service = Mock()
    password_service.verify_password.return_value = password_ok

    event_bus = AsyncMock()

    handler = AuthenticateAccountHandler(
        account_repo=account_repo,
        password_service=password_service,
        event_bus=event_bus,
        clock=clock or FixedClock(NOW),
    )
    return handler, account_repo, password_service, event_bus


def published(event_bus: AsyncMock) -> list:
    return [call.args[0] for call in event_bus.publish.call_args_list]


COMMAND = AuthenticateAccount(email="student@school.test", password="Str0ng!Pass#2024")


@pytest.mark.unit
class TestAuthenticateSuccess:
    """Test successful authentication."""

    @pytest.mark.asyncio
    async def test_success_returns_account_and_resets_counter(self):
        account = create_account(failed_login_attempts=3)
        handler, account_repo, _, _ = make_handler(account, password_ok=True)

        result = await handler.handle(COMMAND)

        assert isinstance(result, Success)
        assert result.value is account
        assert account.failed_login_attempts == 0
        assert account.locked_until is None
        assert account.last_login_at == NOW
        account_repo.update.assert_awaited_once_with(account)

    @pytest.mark.asyncio
    async def test_repeated_success_never_increments_counter(self):
        account = create_account(failed_login_attempts=3)
        handler, account_repo, _, _ = make_handler(account, password_ok=True)

        await handler.handle(COMMAND)
        result = await handler.handle(COMMAND)

        assert isinstance(result, Success)
        assert account.failed_login_attempts == 0
        assert account_repo.update.await_count == 2

    @pytest.mark.asyncio
    async def test_success_verifies_against_stored_hash(self):
        account = create_account(password_hash="stored_hash")
        handler, _, password_service, _ = make_handler(account, password_ok=True)

        await handler.handle(COMMAND)

        password_service.verify_password.assert_called_once_with(
            "Str0ng!Pass#2024", "stored_hash"
        )

    @pytest.mark.asyncio
    async def test_success_publishes_attempted_then_succeeded(self):
        account = create_account()
        handler, _, _, event_bus = make_handler(account, password_ok=True)

        await handler.handle(COMMAND, metadata={"ip_address": "10.0.0.1"})

        events = published(event_bus)
        assert [type(e) for e in events] == [
            AuthenticationAttempted,
            AuthenticationSucceeded,
        ]
        assert events[1].account_id == account.id
        assert all(e.occurred_at == NOW for e in events)
        assert event_bus.publish.call_args.kwargs["metadata"] == {
            "ip_address": "10.0.0.1"
        }


@pytest.mark.unit
class TestAuthenticateInvalidCredentials:
    """Test unknown email and wrong password."""

    @pytest.mark.asyncio
    async def test_unknown_email(self):
        handler, account_repo, password_service, event_bus = make_handler(
            None, password_ok=False
        )

        result = await handler.handle(COMMAND)

        assert isinstance(result, Failure)
        assert result.error == InvalidCredentials()
        assert result.error.attempts_remaining is None
        password_service.verify_password.assert_not_called()
        account_repo.update.assert_not_called()

        failed = published(event_bus)[-1]
        assert isinstance(failed, AuthenticationFailed)
        assert failed.reason == "invalid_credentials"
        assert failed.account_id is None

    @pytest.mark.asyncio
    async def test_wrong_password_counts_failure(self):
        account = create_account()
        handler, account_repo, _, event_bus = make_handler(account, password_ok=False)

        result = await handler.handle(COMMAND)

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidCredentials)
        assert result.error.attempts_remaining == 4
        assert account.failed_login_attempts == 1
        account_repo.update.assert_awaited_once_with(account)

        failed = published(event_bus)[-1]
        assert isinstance(failed, AuthenticationFailed)
        assert failed.attempts_remaining == 4
        assert failed.account_id == account.id

    @pytest.mark.asyncio
    async def test_wrong_password_message(self):
        handler, *_ = make_handler(create_account(), password_ok=False)

        result = await handler.handle(COMMAND)

        assert isinstance(result, Failure)
        assert result.error.message == "Invalid email or password"


@pytest.mark.unit
class TestAuthenticateLockout:
    """Test lock transitions."""

    @pytest.mark.asyncio
    async def test_fifth_failure_locks_account(self):
        account = create_account(failed_login_attempts=4)
        handler, account_repo, _, event_bus = make_handler(account, password_ok=False)

        result = await handler.handle(COMMAND)

        assert isinstance(result, Failure)
        assert isinstance(result.error, AccountLocked)
        assert result.error.locked_until == NOW + timedelta(minutes=15)
        assert result.error.minutes_remaining == 15
        assert result.error.message == (
            "Account is temporarily locked due to too many failed login "
            "attempts. Try again in 15 minutes."
        )
        account_repo.update.assert_awaited_once()

        events = published(event_bus)
        assert [type(e) for e in events] == [
            AuthenticationAttempted,
            AccountLockedOut,
            AuthenticationFailed,
        ]
        assert events[1].failed_attempts == 5
        assert events[2].reason == "account_locked"
        assert events[2].attempts_remaining == 0

    @pytest.mark.asyncio
    async def test_locked_account_rejected_even_with_right_password(self):
        account = create_account(
            failed_login_attempts=5, locked_until=NOW + timedelta(minutes=10)
        )
        handler, account_repo, password_service, _ = make_handler(
            account, password_ok=True
        )

        result = await handler.handle(COMMAND)

        assert isinstance(result, Failure)
        assert isinstance(result.error, AccountLocked)
        assert result.error.minutes_remaining == 10
        assert account.failed_login_attempts == 5
        password_service.verify_password.assert_not_called()
        account_repo.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_locked_message_singular_minute(self):
        account = create_account(
            failed_login_attempts=5, locked_until=NOW + timedelta(seconds=30)
        )
        handler, *_ = make_handler(account, password_ok=True)

        result = await handler.handle(COMMAND)

        assert isinstance(result, Failure)
        assert result.error.message.endswith("Try again in 1 minute.")

    @pytest.mark.asyncio
    async def test_expired_lock_then_right_password_succeeds(self):
        account = create_account(
            failed_login_attempts=5, locked_until=NOW - timedelta(seconds=1)
        )
        handler, account_repo, _, event_bus = make_handler(account, password_ok=True)

        result = await handler.handle(COMMAND)

        assert isinstance(result, Success)
        assert account.failed_login_attempts == 0
        assert account.locked_until is None
        account_repo.update.assert_awaited_once()
        assert AccountLockExpired in [type(e) for e in published(event_bus)]

    @pytest.mark.asyncio
    async def test_expired_lock_then_wrong_password_starts_from_zero(self):
        account = create_account(
            failed_login_attempts=5, locked_until=NOW - timedelta(minutes=1)
        )
        handler, account_repo, _, event_bus = make_handler(account, password_ok=False)

        result = await handler.handle(COMMAND)

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidCredentials)
        assert result.error.attempts_remaining == 4
        assert account.failed_login_attempts == 1
        assert account.locked_until is None
        account_repo.update.assert_awaited_once()

        expired = [e for e in published(event_bus) if isinstance(e, AccountLockExpired)]
        assert expired[0].locked_until == NOW - timedelta(minutes=1)

    @pytest.mark.asyncio
    async def test_lock_expires_after_duration(self):
        clock = FixedClock(NOW)
        account = create_account(failed_login_attempts=4)
        handler, *_ = make_handler(account, password_ok=False, clock=clock)

        await handler.handle(COMMAND)
        clock.advance(timedelta(minutes=14, seconds=59))
        still_locked = await handler.handle(COMMAND)
        clock.advance(timedelta(seconds=1))
        after = await handler.handle(COMMAND)

        assert isinstance(still_locked, Failure)
        assert isinstance(still_locked.error, AccountLocked)
        assert still_locked.error.minutes_remaining == 1
        assert isinstance(after, Failure)
        assert isinstance(after.error, InvalidCredentials)
        assert after.error.attempts_remaining == 4

    @pytest.mark.asyncio
    async def test_configured_limits(self):
        account = create_account(failed_login_attempts=2)
        account_repo = AsyncMock()
        account_repo.find_by_email_for_update.return_value = account
        password_service = Mock()
        password_service.verify_password.return_value = False
        handler = AuthenticateAccountHandler(
            account_repo=account_repo,
            password_service=password_service,
            event_bus=AsyncMock(),
            clock=FixedClock(NOW),
            max_attempts=3,
            lockout_duration=timedelta(minutes=30),
        )

        result = await handler.handle(COMMAND)

        assert isinstance(result, Failure)
        assert isinstance(result.error, AccountLocked)
        assert result.error.minutes_remaining == 30
