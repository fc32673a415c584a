"""Guardian consent grant entity.

A grant records that a guardian consented to a capability on behalf of a
student. Whether it is in force is a function of time and is evaluated on
every read; nothing in storage marks a grant as expired.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from eduguard.domain.enums import ConsentKind


@dataclass
class ConsentGrant:
    """Guardian consent grant.

    Attributes:
        id: Grant identifier.
        student_profile_id: Profile of the student the grant covers.
        guardian_email: Email the consent request was sent to.
        guardian_name: Guardian display name.
        guardian_account_id: Parent account the grant is linked to, if any.
        kind: Capability covered by the grant.
        consent_token: Opaque token used by the guardian confirmation flow.
        granted_at: When the guardian confirmed (None while pending).
        expires_at: Optional end of validity.
        revoked_at: When the grant was withdrawn.
        ip_address: Address the guardian confirmed from.
        user_agent: Client the guardian confirmed with.
        created_at: Creation timestamp.
    """

    id: UUID
    student_profile_id: UUID
    guardian_email: str
    guardian_name: str
    kind: ConsentKind
    consent_token: str
    created_at: datetime
    guardian_account_id: UUID | None = None
    granted_at: datetime | None = None
    expires_at: datetime | None = None
    revoked_at: datetime | None = None
    ip_address: str | None = None
    user_agent: str | None = None

    def is_active(self, now: datetime) -> bool:
        """Check whether the grant is in force at ``now``.

        A grant is active iff it was granted, has not been revoked and has
        either no expiry or an expiry strictly after ``now``.
        """
        if self.granted_at is None or self.revoked_at is not None:
            return False
        return self.expires_at is None or self.expires_at > now

    @property
    def is_revoked(self) -> bool:
        """True once the grant has been withdrawn."""
        return self.revoked_at is not None

    def revoke(self, now: datetime) -> None:
        """Withdraw the grant."""
        self.revoked_at = now
