"""Exceptions raised by the access-control core.

Denials are returned as AuthorizationDecision values. These exceptions cover
the two cases that must not be silently turned into a denial:

    - ProfileMissingError: a student account has no student profile. This is
      a data-integrity fault and surfaces as an internal error.
    - AccessDenied: raised by ``scope_or_fail`` when the scoped query yields
      nothing, for callers that prefer raising over checking.
"""

from uuid import UUID

from eduguard.domain.enums import EntityKind


class ProfileMissingError(Exception):
    """Student account without a student profile."""

    def __init__(self, account_id: UUID) -> None:
        self.account_id = account_id
        super().__init__(f"Student profile not found for account {account_id}")


class AccessDenied(Exception):
    """Caller may not see any row matching the request."""

    def __init__(
        self,
        account_id: UUID,
        entity: EntityKind,
        message: str = "You do not have access to this resource",
    ) -> None:
        self.account_id = account_id
        self.entity = entity
        self.message = message
        super().__init__(message)
