"""AccessTokenRepository protocol for opaque bearer tokens.

Only the SHA-256 digest of a token is ever passed to or returned from the
repository.
"""

from typing import Protocol

from eduguard.domain.entities.access_token import AccessToken


class AccessTokenRepository(Protocol):
    """Bearer token repository protocol (port)."""

    async def find_by_hash(self, token_hash: str) -> AccessToken | None:
        """Find token by its hex SHA-256 digest."""
        ...

    async def save(self, token: AccessToken) -> None:
        """Store new token and commit."""
        ...

    async def update(self, token: AccessToken) -> None:
        """Persist last_used_at / revoked_at and commit."""
        ...
