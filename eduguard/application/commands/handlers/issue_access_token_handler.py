"""Issue access token handler.

Single responsibility: create an opaque bearer token for an account that has
already authenticated. Does NOT check credentials (AuthenticateAccountHandler
does that first).

Flow:
1. Generate raw token and digest
2. Persist the digest with its expiry
3. Return the raw token to the caller (shown once)
"""

from datetime import timedelta

from uuid_extensions import uuid7

from eduguard.application.commands.auth_commands import (
    IssueAccessToken,
    IssuedAccessToken,
)
from eduguard.core.result import Result, Success
from eduguard.domain.entities import AccessToken
from eduguard.domain.protocols import (
    AccessTokenRepository,
    ClockProtocol,
    TokenGenerationProtocol,
)


class IssueAccessTokenHandler:
    """Handler for IssueAccessToken.

    Args:
        token_repo: Bearer token repository.
        token_service: Raw token and digest generator.
        clock: Time source for issuance and expiry.
        lifetime: Token lifetime.
    """

    def __init__(
        self,
        token_repo: AccessTokenRepository,
        token_service: TokenGenerationProtocol,
        clock: ClockProtocol,
        lifetime: timedelta,
    ) -> None:
        self._token_repo = token_repo
        self._token_service = token_service
        self._clock = clock
        self._lifetime = lifetime

    async def handle(self, cmd: IssueAccessToken) -> Result[IssuedAccessToken, str]:
        """Create and persist a token for ``cmd.account_id``.

        Returns:
            Success(IssuedAccessToken) carrying the raw token.
        """
        now = self._clock.now()

        # Step 1: Generate token
        raw_token, token_hash = self._token_service.generate()

        # Step 2: Persist digest only
        expires_at = now + self._lifetime
        await self._token_repo.save(
            AccessToken(
                id=uuid7(),
                account_id=cmd.account_id,
                token_hash=token_hash,
                created_at=now,
                expires_at=expires_at,
            )
        )

        # Step 3: Return raw token
        return Success(value=IssuedAccessToken(token=raw_token, expires_at=expires_at))
