"""Guardian consent commands.

The consent gate only reads grants; these commands are the only writers.
"""

from dataclasses import dataclass
from datetime import timedelta
from uuid import UUID

from eduguard.domain.enums import ConsentKind


@dataclass(frozen=True, kw_only=True)
class GrantGuardianConsent:
    """Record an active guardian consent grant for a student.

    Attributes:
        student_account_id: Student account the consent covers.
        guardian_email: Guardian email.
        guardian_name: Guardian display name.
        kind: Capability covered by the grant.
        guardian_account_id: Parent account to link (drives parent visibility).
        ttl: Validity; defaults to the configured grant lifetime.
        ip_address: Address of the guardian confirmation.
        user_agent: Client of the guardian confirmation.
    """

    student_account_id: UUID
    guardian_email: str
    guardian_name: str
    kind: ConsentKind = ConsentKind.GENERAL
    guardian_account_id: UUID | None = None
    ttl: timedelta | None = None
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class RevokeGuardianConsent:
    """Withdraw a guardian consent grant.

    Attributes:
        grant_id: Grant to revoke.
    """

    grant_id: UUID
