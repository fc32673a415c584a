"""Logging event handler for access-control events.

Subscribes to every domain event and writes one structured log line each.

Log Levels:
    - INFO: attempts, successes, registrations, consent workflow
    - WARNING: authentication failures, lockouts, denials, admin overrides

Structured Fields:
    - event_id / occurred_at on every line
    - account_id and the event's own fields where present
    - never passwords or tokens (events do not carry them)
"""

from eduguard.domain.events import (
    AccountLockedOut,
    AccountLockExpired,
    AccountRegistered,
    AuthenticationAttempted,
    AuthenticationFailed,
    AuthenticationSucceeded,
    ConsentDenied,
    GuardianConsentGranted,
    GuardianConsentRevoked,
    RecordAccessDenied,
    RoleDenied,
    RowScopeOverrideUsed,
)
from eduguard.domain.protocols.event_bus_protocol import EventBusProtocol
from eduguard.domain.protocols.logger_protocol import LoggerProtocol


class LoggingEventHandler:
    """Structured logging of domain events.

    Example:
        >>> handler = LoggingEventHandler(logger=get_logger())
        >>> handler.register(event_bus)
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    def register(self, event_bus: EventBusProtocol) -> None:
        """Subscribe every handler method to its event type."""
        event_bus.subscribe(AuthenticationAttempted, self.handle_authentication_attempted)  # type: ignore[arg-type]
        event_bus.subscribe(AuthenticationSucceeded, self.handle_authentication_succeeded)  # type: ignore[arg-type]
        event_bus.subscribe(AuthenticationFailed, self.handle_authentication_failed)  # type: ignore[arg-type]
        event_bus.subscribe(AccountLockedOut, self.handle_account_locked_out)  # type: ignore[arg-type]
        event_bus.subscribe(AccountLockExpired, self.handle_account_lock_expired)  # type: ignore[arg-type]
        event_bus.subscribe(ConsentDenied, self.handle_consent_denied)  # type: ignore[arg-type]
        event_bus.subscribe(RoleDenied, self.handle_role_denied)  # type: ignore[arg-type]
        event_bus.subscribe(RowScopeOverrideUsed, self.handle_row_scope_override_used)  # type: ignore[arg-type]
        event_bus.subscribe(RecordAccessDenied, self.handle_record_access_denied)  # type: ignore[arg-type]
        event_bus.subscribe(AccountRegistered, self.handle_account_registered)  # type: ignore[arg-type]
        event_bus.subscribe(GuardianConsentGranted, self.handle_guardian_consent_granted)  # type: ignore[arg-type]
        event_bus.subscribe(GuardianConsentRevoked, self.handle_guardian_consent_revoked)  # type: ignore[arg-type]

    # =========================================================================
    # Authentication
    # =========================================================================

    async def handle_authentication_attempted(
        self, event: AuthenticationAttempted
    ) -> None:
        self._logger.info(
            "authentication_attempted",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            email=event.email,
        )

    async def handle_authentication_succeeded(
        self, event: AuthenticationSucceeded
    ) -> None:
        self._logger.info(
            "authentication_succeeded",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            account_id=str(event.account_id),
            email=event.email,
        )

    async def handle_authentication_failed(self, event: AuthenticationFailed) -> None:
        self._logger.warning(
            "authentication_failed",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            email=event.email,
            reason=event.reason,
            account_id=str(event.account_id) if event.account_id else None,
            attempts_remaining=event.attempts_remaining,
        )

    async def handle_account_locked_out(self, event: AccountLockedOut) -> None:
        self._logger.warning(
            "account_locked_out",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            account_id=str(event.account_id),
            locked_until=event.locked_until.isoformat(),
            failed_attempts=event.failed_attempts,
        )

    async def handle_account_lock_expired(self, event: AccountLockExpired) -> None:
        self._logger.info(
            "account_lock_expired",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            account_id=str(event.account_id),
            locked_until=event.locked_until.isoformat(),
        )

    # =========================================================================
    # Authorization
    # =========================================================================

    async def handle_consent_denied(self, event: ConsentDenied) -> None:
        self._logger.warning(
            "consent_denied",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            account_id=str(event.account_id),
            kind=event.kind,
        )

    async def handle_role_denied(self, event: RoleDenied) -> None:
        self._logger.warning(
            "role_denied",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            account_id=str(event.account_id),
            role=event.role,
            allowed_roles=list(event.allowed_roles),
        )

    async def handle_row_scope_override_used(
        self, event: RowScopeOverrideUsed
    ) -> None:
        self._logger.warning(
            "row_scope_override_used",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            admin_account_id=str(event.admin_account_id),
            override_account_id=str(event.override_account_id),
            entity=event.entity,
            include_trashed=event.include_trashed,
        )

    async def handle_record_access_denied(self, event: RecordAccessDenied) -> None:
        self._logger.warning(
            "record_access_denied",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            account_id=str(event.account_id),
            entity=event.entity,
        )

    # =========================================================================
    # Account lifecycle and guardian consent
    # =========================================================================

    async def handle_account_registered(self, event: AccountRegistered) -> None:
        self._logger.info(
            "account_registered",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            account_id=str(event.account_id),
            email=event.email,
            role=event.role,
        )

    async def handle_guardian_consent_granted(
        self, event: GuardianConsentGranted
    ) -> None:
        self._logger.info(
            "guardian_consent_granted",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            grant_id=str(event.grant_id),
            student_account_id=str(event.student_account_id),
            guardian_email=event.guardian_email,
            kind=event.kind,
        )

    async def handle_guardian_consent_revoked(
        self, event: GuardianConsentRevoked
    ) -> None:
        self._logger.info(
            "guardian_consent_revoked",
            event_id=str(event.event_id),
            occurred_at=event.occurred_at.isoformat(),
            grant_id=str(event.grant_id),
            student_profile_id=str(event.student_profile_id),
        )
