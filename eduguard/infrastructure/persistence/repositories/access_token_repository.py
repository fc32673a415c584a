"""AccessTokenRepository - SQLAlchemy implementation (digest lookup)."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eduguard.domain.entities.access_token import AccessToken
from eduguard.infrastructure.persistence.models.access_token import AccessTokenModel


class AccessTokenRepository:
    """SQLAlchemy implementation of the AccessTokenRepository protocol."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_hash(self, token_hash: str) -> AccessToken | None:
        stmt = select(AccessTokenModel).where(AccessTokenModel.token_hash == token_hash)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return AccessToken(
            id=model.id,
            account_id=model.account_id,
            token_hash=model.token_hash,
            created_at=model.created_at,
            expires_at=model.expires_at,
            last_used_at=model.last_used_at,
            revoked_at=model.revoked_at,
        )

    async def save(self, token: AccessToken) -> None:
        self.session.add(
            AccessTokenModel(
                id=token.id,
                account_id=token.account_id,
                token_hash=token.token_hash,
                created_at=token.created_at,
                expires_at=token.expires_at,
                last_used_at=token.last_used_at,
                revoked_at=token.revoked_at,
            )
        )
        await self.session.commit()

    async def update(self, token: AccessToken) -> None:
        model = await self.session.get(AccessTokenModel, token.id)
        if model is None:
            return
        model.last_used_at = token.last_used_at
        model.revoked_at = token.revoked_at
        await self.session.commit()
