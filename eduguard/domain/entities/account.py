"""Account domain entity.

Pure business logic, no framework dependencies.

Lockout:
    The account owns three security fields: failed_login_attempts,
    locked_until and last_login_at. They are changed only by the
    authentication workflow through the methods below, which take the
    current time explicitly so behaviour is reproducible under a test clock.

GDPR preferences:
    show_grades, allow_search, share_with_parents and marketing_emails are
    per-account switches. allow_search controls whether a student appears in
    other students' directory queries.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID

from eduguard.domain.enums import AccountRole

DEFAULT_MAX_FAILED_ATTEMPTS = 5
DEFAULT_LOCKOUT_DURATION = timedelta(minutes=15)


@dataclass
class Account:
    """Account domain entity with credential and consent rules.

    Business Rules:
        - Account locks after 5 consecutive failed logins
        - Lockout lasts 15 minutes; expiry is observed lazily at the next attempt
        - A future locked_until blocks authentication unconditionally
        - Failed login counter resets on success and when an expired lock is seen

    Attributes:
        id: Unique account identifier.
        email: Unique email address.
        handle: Unique public handle.
        full_name: Display name.
        role: Stored role text (see AccountRole; unknown values are kept as-is).
        password_hash: Bcrypt hash (never plaintext).
        data_processing_consent: Whether the account accepted data processing.
        consent_given_at: When data processing consent was recorded.
        failed_login_attempts: Consecutive failed logins (0 after success).
        locked_until: End of the current lockout, if any.
        last_login_at: Last successful authentication.
        deleted_at: Soft-delete marker.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.

    Example:
        >>> account.record_failed_login(now)
        False
        >>> account.failed_login_attempts
        1
    """

    id: UUID
    email: str
    handle: str
    full_name: str
    role: str
    password_hash: str
    data_processing_consent: bool
    consent_given_at: datetime | None
    failed_login_attempts: int
    locked_until: datetime | None
    last_login_at: datetime | None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    # GDPR preferences
    show_grades: bool = True
    allow_search: bool = False
    share_with_parents: bool = True
    marketing_emails: bool = False

    @property
    def account_role(self) -> AccountRole | None:
        """Parsed role, or None when the stored value is not recognised."""
        return AccountRole.parse(self.role)

    @property
    def is_deleted(self) -> bool:
        """True when the account has been soft-deleted."""
        return self.deleted_at is not None

    def is_locked(self, now: datetime) -> bool:
        """Check if a lockout is in force at ``now``.

        Args:
            now: Current time (timezone-aware).

        Returns:
            bool: True if locked_until is in the future.
        """
        if self.locked_until is None:
            return False
        return now < self.locked_until

    def has_expired_lock(self, now: datetime) -> bool:
        """True when a lock timestamp is present but no longer in force."""
        return self.locked_until is not None and not self.is_locked(now)

    def minutes_until_unlock(self, now: datetime) -> int:
        """Whole minutes remaining on the lock, rounded up.

        Returns 0 when the account is not locked.
        """
        if not self.is_locked(now):
            return 0
        assert self.locked_until is not None
        remaining = (self.locked_until - now).total_seconds()
        return math.ceil(remaining / 60)

    def attempts_remaining(self, max_attempts: int = DEFAULT_MAX_FAILED_ATTEMPTS) -> int:
        """Failed attempts left before the account locks."""
        return max(max_attempts - self.failed_login_attempts, 0)

    def record_failed_login(
        self,
        now: datetime,
        max_attempts: int = DEFAULT_MAX_FAILED_ATTEMPTS,
        lockout_duration: timedelta = DEFAULT_LOCKOUT_DURATION,
    ) -> bool:
        """Count a failed login and lock the account when the limit is hit.

        Args:
            now: Current time.
            max_attempts: Failures that trigger a lock.
            lockout_duration: How long the lock lasts.

        Returns:
            bool: True if this failure locked the account.
        """
        self.failed_login_attempts += 1
        self.updated_at = now
        if self.failed_login_attempts >= max_attempts:
            self.locked_until = now + lockout_duration
            return True
        return False

    def reset_failed_login(self, now: datetime) -> None:
        """Clear the failure counter and any lock."""
        self.failed_login_attempts = 0
        self.locked_until = None
        self.updated_at = now

    def record_successful_login(self, now: datetime) -> None:
        """Reset lockout state and stamp the successful authentication."""
        self.reset_failed_login(now)
        self.last_login_at = now

    def has_data_processing_consent(self) -> bool:
        """True when both the consent flag and its timestamp are recorded."""
        return self.data_processing_consent and self.consent_given_at is not None
