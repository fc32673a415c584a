"""Opaque bearer token entity.

Only the SHA-256 digest of a token is stored; the raw value is shown to the
client once at issuance and never persisted.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class AccessToken:
    """Stored bearer credential.

    Attributes:
        id: Token identifier.
        account_id: Account the token authenticates.
        token_hash: Hex SHA-256 digest of the raw token.
        created_at: Issuance time.
        expires_at: Optional expiry.
        last_used_at: Last successful lookup.
        revoked_at: Set when the token is withdrawn.
    """

    id: UUID
    account_id: UUID
    token_hash: str
    created_at: datetime
    expires_at: datetime | None = None
    last_used_at: datetime | None = None
    revoked_at: datetime | None = None

    def is_usable(self, now: datetime) -> bool:
        """True if the token is neither revoked nor expired at ``now``."""
        if self.revoked_at is not None:
            return False
        return self.expires_at is None or self.expires_at > now
