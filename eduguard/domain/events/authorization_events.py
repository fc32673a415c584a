"""Authorization domain events.

Published by the access-control service next to the decision it returns.
The gates themselves stay pure; only the service layer emits.

- ConsentDenied: consent gate refused a request
- RoleDenied: role gate refused a request
- RowScopeOverrideUsed: an admin scoped a query as another account
- RecordAccessDenied: scope_or_fail found nothing the caller may see
"""

from dataclasses import dataclass
from uuid import UUID

from eduguard.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True, slots=True)
class ConsentDenied(DomainEvent):
    """Consent gate denial.

    Attributes:
        account_id: Caller.
        kind: DenialKind value (guardian or data processing consent).
        reason: Message returned to the caller.
    """

    account_id: UUID
    kind: str
    reason: str


@dataclass(frozen=True, kw_only=True, slots=True)
class RoleDenied(DomainEvent):
    """Role gate denial.

    Attributes:
        account_id: Caller.
        role: Caller's stored role.
        allowed_roles: Roles the endpoint accepts.
    """

    account_id: UUID
    role: str
    allowed_roles: tuple[str, ...]


@dataclass(frozen=True, kw_only=True, slots=True)
class RowScopeOverrideUsed(DomainEvent):
    """Admin scoped a query as another identity.

    Attributes:
        admin_account_id: Admin issuing the query.
        override_account_id: Identity the query was scoped as.
        entity: EntityKind value of the query.
        include_trashed: Whether soft-deleted rows were requested.
    """

    admin_account_id: UUID
    override_account_id: UUID
    entity: str
    include_trashed: bool


@dataclass(frozen=True, kw_only=True, slots=True)
class RecordAccessDenied(DomainEvent):
    """Scoped query returned nothing for the caller.

    Attributes:
        account_id: Caller.
        entity: EntityKind value of the query.
    """

    account_id: UUID
    entity: str
