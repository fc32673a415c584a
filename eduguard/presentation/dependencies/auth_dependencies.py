"""Bearer authentication dependencies.

Resolves an opaque bearer token to the calling account. Only the SHA-256
digest of the token is stored; lookup hashes the presented token and
matches the digest.

Usage:
    @router.get("/me")
    async def me(account: CurrentAccount):
        return {"id": str(account.id)}
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from eduguard.core.container import get_clock, get_db_session
from eduguard.core.enums import ErrorCode
from eduguard.domain.entities import Account
from eduguard.infrastructure.persistence.repositories import (
    AccessTokenRepository,
    AccountRepository,
)
from eduguard.infrastructure.security.token_digest import digest_token
from eduguard.presentation.errors import GateDenied

# auto_error=False so a missing header yields our 401 problem body
bearer_scheme = HTTPBearer(auto_error=False)

AUTHENTICATION_REQUIRED = "Authentication required"
INVALID_TOKEN = "Invalid or expired access token"


def _unauthorized(detail: str) -> GateDenied:
    return GateDenied(
        ErrorCode.AUTHENTICATION_FAILED,
        detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_account(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> Account:
    """Get the account behind the bearer token.

    Raises:
        GateDenied 401 AUTHENTICATION_FAILED: Missing, unknown, revoked or
            expired token, or the account no longer exists.
    """
    if credentials is None:
        raise _unauthorized(AUTHENTICATION_REQUIRED)

    token_repo = AccessTokenRepository(session=session)
    token = await token_repo.find_by_hash(digest_token(credentials.credentials))
    now = get_clock().now()
    if token is None or not token.is_usable(now):
        raise _unauthorized(INVALID_TOKEN)

    account = await AccountRepository(session=session).find_by_id(token.account_id)
    if account is None:
        raise _unauthorized(INVALID_TOKEN)

    token.last_used_at = now
    await token_repo.update(token)
    return account


CurrentAccount = Annotated[Account, Depends(get_current_account)]
