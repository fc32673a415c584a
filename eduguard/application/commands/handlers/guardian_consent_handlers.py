"""Guardian consent workflow handlers.

GrantGuardianConsentHandler records an active grant (granted now, expiring
after the configured lifetime). RevokeGuardianConsentHandler withdraws one.
Both publish events; neither touches account security fields.
"""

import secrets
from datetime import timedelta

from uuid_extensions import uuid7

from eduguard.application.commands.consent_commands import (
    GrantGuardianConsent,
    RevokeGuardianConsent,
)
from eduguard.core.enums import ErrorCode
from eduguard.core.errors import DomainError, NotFoundError, ValidationError
from eduguard.core.result import Failure, Result, Success
from eduguard.domain.entities import ConsentGrant
from eduguard.domain.events import GuardianConsentGranted, GuardianConsentRevoked
from eduguard.domain.protocols import (
    ClockProtocol,
    ConsentGrantRepository,
    EventBusProtocol,
    StudentProfileRepository,
)

DEFAULT_GRANT_TTL = timedelta(days=365)


class GrantGuardianConsentHandler:
    """Handler for the GrantGuardianConsent command.

    Args:
        profile_repo: Student profile lookup.
        grant_repo: Grant persistence.
        event_bus: Event bus.
        clock: Time source.
        default_ttl: Grant lifetime when the command gives none.
    """

    def __init__(
        self,
        profile_repo: StudentProfileRepository,
        grant_repo: ConsentGrantRepository,
        event_bus: EventBusProtocol,
        clock: ClockProtocol,
        default_ttl: timedelta = DEFAULT_GRANT_TTL,
    ) -> None:
        self._profile_repo = profile_repo
        self._grant_repo = grant_repo
        self._event_bus = event_bus
        self._clock = clock
        self._default_ttl = default_ttl

    async def handle(self, cmd: GrantGuardianConsent) -> Result[ConsentGrant, DomainError]:
        """Create an active grant for the student's profile.

        Returns:
            Success(ConsentGrant), or Failure(NotFoundError) when the student
            has no profile.
        """
        profile = await self._profile_repo.find_by_account_id(cmd.student_account_id)
        if profile is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.NOT_FOUND,
                    message="Student profile not found",
                    resource_type="StudentProfile",
                    resource_id=str(cmd.student_account_id),
                )
            )

        now = self._clock.now()
        grant = ConsentGrant(
            id=uuid7(),
            student_profile_id=profile.id,
            guardian_email=cmd.guardian_email.strip().lower(),
            guardian_name=cmd.guardian_name,
            guardian_account_id=cmd.guardian_account_id,
            kind=cmd.kind,
            consent_token=secrets.token_urlsafe(32),
            granted_at=now,
            expires_at=now + (cmd.ttl or self._default_ttl),
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
            created_at=now,
        )
        await self._grant_repo.save(grant)

        await self._event_bus.publish(
            GuardianConsentGranted(
                occurred_at=now,
                grant_id=grant.id,
                student_account_id=cmd.student_account_id,
                guardian_email=grant.guardian_email,
                kind=grant.kind.value,
            )
        )
        return Success(value=grant)


class RevokeGuardianConsentHandler:
    """Handler for the RevokeGuardianConsent command."""

    def __init__(
        self,
        grant_repo: ConsentGrantRepository,
        event_bus: EventBusProtocol,
        clock: ClockProtocol,
    ) -> None:
        self._grant_repo = grant_repo
        self._event_bus = event_bus
        self._clock = clock

    async def handle(self, cmd: RevokeGuardianConsent) -> Result[ConsentGrant, DomainError]:
        """Revoke a grant.

        Returns:
            Success(ConsentGrant) with revoked_at set.
            Failure(NotFoundError) for an unknown grant.
            Failure(ValidationError) if the grant was already revoked.
        """
        grant = await self._grant_repo.find_by_id(cmd.grant_id)
        if grant is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.NOT_FOUND,
                    message="Consent grant not found",
                    resource_type="ConsentGrant",
                    resource_id=str(cmd.grant_id),
                )
            )
        if grant.is_revoked:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.CONSENT_ALREADY_REVOKED,
                    message="Consent grant is already revoked",
                    field="grant_id",
                )
            )

        now = self._clock.now()
        grant.revoke(now)
        await self._grant_repo.update(grant)

        await self._event_bus.publish(
            GuardianConsentRevoked(
                occurred_at=now,
                grant_id=grant.id,
                student_profile_id=grant.student_profile_id,
            )
        )
        return Success(value=grant)
