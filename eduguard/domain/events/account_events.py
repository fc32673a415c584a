"""Account lifecycle and guardian consent events.

- AccountRegistered: new account persisted
- GuardianConsentGranted: grant recorded for a student
- GuardianConsentRevoked: grant withdrawn
"""

from dataclasses import dataclass
from uuid import UUID

from eduguard.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True, slots=True)
class AccountRegistered(DomainEvent):
    """Account created.

    Attributes:
        account_id: New account.
        email: Account email.
        role: Role the account registered with.
    """

    account_id: UUID
    email: str
    role: str


@dataclass(frozen=True, kw_only=True, slots=True)
class GuardianConsentGranted(DomainEvent):
    """Guardian consent recorded.

    Attributes:
        grant_id: New grant.
        student_account_id: Student the grant covers.
        guardian_email: Guardian email.
        kind: ConsentKind value.
    """

    grant_id: UUID
    student_account_id: UUID
    guardian_email: str
    kind: str


@dataclass(frozen=True, kw_only=True, slots=True)
class GuardianConsentRevoked(DomainEvent):
    """Guardian consent withdrawn.

    Attributes:
        grant_id: Revoked grant.
        student_profile_id: Profile the grant belonged to.
    """

    grant_id: UUID
    student_profile_id: UUID
