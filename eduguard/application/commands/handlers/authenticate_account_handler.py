"""Authenticate account handler (credential and lockout state machine).

Single responsibility: verify credentials and advance the account's lockout
state. Does NOT create sessions or issue tokens.

States:
    Unlocked(failures)  failures in 0..max_attempts-1
    Locked(until)

Flow:
1. Emit AuthenticationAttempted event
2. Load account by email holding a row lock
3. Unknown email -> InvalidCredentials (no attempts_remaining, no mutation)
4. Lock in force -> AccountLocked (no mutation)
5. Lock expired -> reset to Unlocked(0) and continue
6. Verify password
7. Success -> reset counter, stamp last login, persist, AuthenticationSucceeded
8. Failure -> count it; lock at the limit; persist; InvalidCredentials or AccountLocked

Every mutating branch persists before returning. The repository commits in
update(), which also releases the row lock, so the whole read-modify-write
runs in one transaction and concurrent attempts on the same account are
serialised.

Architecture:
- Application layer ONLY imports from domain and core
- Repositories, hashing, clock and event bus are injected via protocols
"""

from datetime import datetime, timedelta
from uuid import UUID

from eduguard.application.commands.auth_commands import AuthenticateAccount
from eduguard.core.result import Failure, Result, Success
from eduguard.domain.entities import Account
from eduguard.domain.entities.account import (
    DEFAULT_LOCKOUT_DURATION,
    DEFAULT_MAX_FAILED_ATTEMPTS,
)
from eduguard.domain.enums import DenialKind
from eduguard.domain.errors import AccountLocked, InvalidCredentials
from eduguard.domain.events import (
    AccountLockedOut,
    AccountLockExpired,
    AuthenticationAttempted,
    AuthenticationFailed,
    AuthenticationSucceeded,
)
from eduguard.domain.protocols import (
    AccountRepository,
    ClockProtocol,
    EventBusProtocol,
    PasswordHashingProtocol,
)

type AuthenticationFailure = InvalidCredentials | AccountLocked


class AuthenticateAccountHandler:
    """Handler for the AuthenticateAccount command.

    Args:
        account_repo: Account repository (needs find_by_email_for_update and update).
        password_service: Password verification.
        event_bus: Event bus for audit events.
        clock: Time source.
        max_attempts: Consecutive failures that lock the account.
        lockout_duration: Length of a lockout.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        password_service: PasswordHashingProtocol,
        event_bus: EventBusProtocol,
        clock: ClockProtocol,
        max_attempts: int = DEFAULT_MAX_FAILED_ATTEMPTS,
        lockout_duration: timedelta = DEFAULT_LOCKOUT_DURATION,
    ) -> None:
        self._account_repo = account_repo
        self._password_service = password_service
        self._event_bus = event_bus
        self._clock = clock
        self._max_attempts = max_attempts
        self._lockout_duration = lockout_duration

    async def handle(
        self,
        cmd: AuthenticateAccount,
        metadata: dict[str, str] | None = None,
    ) -> Result[Account, AuthenticationFailure]:
        """Handle an authentication attempt.

        Args:
            cmd: Email and password.
            metadata: Optional request metadata (ip_address, user_agent) for
                the audit trail.

        Returns:
            Success(Account) with the reset security fields persisted.
            Failure(InvalidCredentials) for unknown email or wrong password.
            Failure(AccountLocked) while locked or when this failure locked it.
        """
        now = self._clock.now()

        # Step 1: Emit ATTEMPTED event
        await self._event_bus.publish(
            AuthenticationAttempted(occurred_at=now, email=cmd.email),
            metadata=metadata,
        )

        # Step 2: Load account under a row lock
        account = await self._account_repo.find_by_email_for_update(cmd.email)

        # Step 3: Unknown email
        if account is None:
            await self._publish_failed(
                now, cmd.email, DenialKind.INVALID_CREDENTIALS, None, None, metadata
            )
            return Failure(error=InvalidCredentials())

        # Step 4: Lock in force
        if account.is_locked(now):
            assert account.locked_until is not None
            await self._publish_failed(
                now, cmd.email, DenialKind.ACCOUNT_LOCKED, account.id, None, metadata
            )
            return Failure(
                error=AccountLocked(
                    locked_until=account.locked_until,
                    minutes_remaining=account.minutes_until_unlock(now),
                )
            )

        # Step 5: Expired lock observed; reset is persisted with the outcome below
        expired_lock = account.locked_until if account.has_expired_lock(now) else None
        if expired_lock is not None:
            account.reset_failed_login(now)

        # Step 6: Verify password
        if not self._password_service.verify_password(
            cmd.password, account.password_hash
        ):
            return await self._handle_wrong_password(
                account, cmd.email, now, expired_lock, metadata
            )

        # Step 7: Success
        account.record_successful_login(now)
        await self._account_repo.update(account)
        await self._publish_lock_expired(account.id, expired_lock, now, metadata)

        await self._event_bus.publish(
            AuthenticationSucceeded(
                occurred_at=now,
                account_id=account.id,
                email=account.email,
            ),
            metadata=metadata,
        )
        return Success(value=account)

    async def _handle_wrong_password(
        self,
        account: Account,
        email: str,
        now: datetime,
        expired_lock: datetime | None,
        metadata: dict[str, str] | None,
    ) -> Failure[AuthenticationFailure]:
        locked = account.record_failed_login(
            now, self._max_attempts, self._lockout_duration
        )
        await self._account_repo.update(account)
        await self._publish_lock_expired(account.id, expired_lock, now, metadata)

        if locked:
            assert account.locked_until is not None
            await self._event_bus.publish(
                AccountLockedOut(
                    occurred_at=now,
                    account_id=account.id,
                    locked_until=account.locked_until,
                    failed_attempts=account.failed_login_attempts,
                ),
                metadata=metadata,
            )
            await self._publish_failed(
                now, email, DenialKind.ACCOUNT_LOCKED, account.id, 0, metadata
            )
            return Failure(
                error=AccountLocked(
                    locked_until=account.locked_until,
                    minutes_remaining=account.minutes_until_unlock(now),
                )
            )

        remaining = account.attempts_remaining(self._max_attempts)
        await self._publish_failed(
            now, email, DenialKind.INVALID_CREDENTIALS, account.id, remaining, metadata
        )
        return Failure(error=InvalidCredentials(attempts_remaining=remaining))

    async def _publish_lock_expired(
        self,
        account_id: UUID,
        expired_lock: datetime | None,
        now: datetime,
        metadata: dict[str, str] | None,
    ) -> None:
        if expired_lock is None:
            return
        await self._event_bus.publish(
            AccountLockExpired(
                occurred_at=now,
                account_id=account_id,
                locked_until=expired_lock,
            ),
            metadata=metadata,
        )

    async def _publish_failed(
        self,
        now: datetime,
        email: str,
        reason: DenialKind,
        account_id: UUID | None,
        attempts_remaining: int | None,
        metadata: dict[str, str] | None,
    ) -> None:
        """Publish AuthenticationFailed event.

        Args:
            now: Time of the attempt.
            email: Email address attempted.
            reason: Failure reason.
            account_id: Account if found (for tracking lockout).
            attempts_remaining: Failures left before lockout, when counted.
            metadata: Request metadata for audit trail.
        """
        await self._event_bus.publish(
            AuthenticationFailed(
                occurred_at=now,
                email=email,
                reason=reason.value,
                account_id=account_id,
                attempts_remaining=attempts_remaining,
            ),
            metadata=metadata,
        )
