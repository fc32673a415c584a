"""Base domain event class.

Domain events record "things that happened" in the access-control core and
are named in past tense (AccountLocked, ConsentDenied). They are the audit
interface: the core publishes them and a collaborator subscribed to the
event bus persists them.

Usage:
    >>> @dataclass(frozen=True, kw_only=True, slots=True)
    >>> class AccountLocked(DomainEvent):
    ...     account_id: UUID
    ...     locked_until: datetime
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7


@dataclass(frozen=True, kw_only=True, slots=True)
class DomainEvent:
    """Base class for all domain events.

    All domain events MUST:
        1. Inherit from this base class
        2. Use past tense naming
        3. Be frozen dataclasses with kw_only=True
        4. Never carry secrets (passwords, raw tokens)

    Attributes:
        event_id: Time-ordered UUID (v7) identifying this event instance.
        occurred_at: When the event occurred (UTC). Workflows pass the
            injected clock's time so events line up with persisted state.
    """

    event_id: UUID = field(default_factory=uuid7)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
