"""Authentication domain events.

Pattern: 3 events per workflow (ATTEMPTED → SUCCEEDED/FAILED), plus lockout
transitions:

- AuthenticationAttempted: before the account is loaded
- AuthenticationSucceeded: after the successful login is persisted
- AuthenticationFailed: unknown email, wrong password or active lock
- AccountLockedOut: the failure that hit the limit locked the account
- AccountLockExpired: an expired lock was observed and cleared
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from eduguard.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True, slots=True)
class AuthenticationAttempted(DomainEvent):
    """Login attempt received.

    Attributes:
        email: Email the caller supplied.
    """

    email: str


@dataclass(frozen=True, kw_only=True, slots=True)
class AuthenticationSucceeded(DomainEvent):
    """Login succeeded and the reset was persisted.

    Attributes:
        account_id: Authenticated account.
        email: Account email.
    """

    account_id: UUID
    email: str


@dataclass(frozen=True, kw_only=True, slots=True)
class AuthenticationFailed(DomainEvent):
    """Login refused.

    Attributes:
        email: Email the caller supplied.
        reason: Machine-readable reason (DenialKind value).
        account_id: Account, when the email matched one.
        attempts_remaining: Failures left before lockout, when counted.
    """

    email: str
    reason: str
    account_id: UUID | None = None
    attempts_remaining: int | None = None


@dataclass(frozen=True, kw_only=True, slots=True)
class AccountLockedOut(DomainEvent):
    """Account locked after too many consecutive failures.

    Attributes:
        account_id: Locked account.
        locked_until: End of the lockout.
        failed_attempts: Counter value that triggered the lock.
    """

    account_id: UUID
    locked_until: datetime
    failed_attempts: int


@dataclass(frozen=True, kw_only=True, slots=True)
class AccountLockExpired(DomainEvent):
    """Expired lock observed at login and cleared.

    Attributes:
        account_id: Account whose lock expired.
        locked_until: The lock timestamp that was cleared.
    """

    account_id: UUID
    locked_until: datetime
