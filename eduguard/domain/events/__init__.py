"""Domain events package.

Usage:
    from eduguard.domain.events import AuthenticationFailed, ConsentDenied
"""

from eduguard.domain.events.account_events import (
    AccountRegistered,
    GuardianConsentGranted,
    GuardianConsentRevoked,
)
from eduguard.domain.events.authentication_events import (
    AccountLockedOut,
    AccountLockExpired,
    AuthenticationAttempted,
    AuthenticationFailed,
    AuthenticationSucceeded,
)
from eduguard.domain.events.authorization_events import (
    ConsentDenied,
    RecordAccessDenied,
    RoleDenied,
    RowScopeOverrideUsed,
)
from eduguard.domain.events.base_event import DomainEvent

ALL_EVENT_TYPES: tuple[type[DomainEvent], ...] = (
    AuthenticationAttempted,
    AuthenticationSucceeded,
    AuthenticationFailed,
    AccountLockedOut,
    AccountLockExpired,
    ConsentDenied,
    RoleDenied,
    RowScopeOverrideUsed,
    RecordAccessDenied,
    AccountRegistered,
    GuardianConsentGranted,
    GuardianConsentRevoked,
)

__all__ = [
    "ALL_EVENT_TYPES",
    "AccountLockExpired",
    "AccountLockedOut",
    "AccountRegistered",
    "AuthenticationAttempted",
    "AuthenticationFailed",
    "AuthenticationSucceeded",
    "ConsentDenied",
    "DomainEvent",
    "GuardianConsentGranted",
    "GuardianConsentRevoked",
    "RecordAccessDenied",
    "RoleDenied",
    "RowScopeOverrideUsed",
]
