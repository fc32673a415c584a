"""AccountRepository - SQLAlchemy implementation of the AccountRepository port.

Maps between domain Account entities and AccountModel rows. Soft-deleted
accounts are excluded from every finder.
"""

from uuid import UUID

from sqlalchemy import Select, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eduguard.domain.entities.account import Account
from eduguard.domain.entities.student_profile import StudentProfile
from eduguard.infrastructure.persistence.models.account import AccountModel
from eduguard.infrastructure.persistence.repositories.student_profile_repository import (
    profile_to_model,
)


def _live() -> Select[tuple[AccountModel]]:
    return select(AccountModel).where(AccountModel.deleted_at.is_(None))


class AccountRepository:
    """SQLAlchemy implementation of the AccountRepository protocol.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = AccountRepository(session)
        ...     account = await repo.find_by_email("student@school.test")
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, account_id: UUID) -> Account | None:
        stmt = _live().where(AccountModel.id == account_id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def find_by_email(self, email: str) -> Account | None:
        """Find account by email (case-insensitive exact match)."""
        stmt = _live().where(func.lower(AccountModel.email) == email.lower())
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def find_by_email_for_update(self, email: str) -> Account | None:
        """Find account by email holding a row lock until the next commit.

        Backends without row locks (SQLite) ignore FOR UPDATE; there writes
        are already serialised database-wide.
        """
        stmt = (
            _live()
            .where(func.lower(AccountModel.email) == email.lower())
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def exists_by_email(self, email: str) -> bool:
        stmt = select(
            exists().where(
                func.lower(AccountModel.email) == email.lower(),
                AccountModel.deleted_at.is_(None),
            )
        )
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    async def exists_by_handle(self, handle: str) -> bool:
        stmt = select(
            exists().where(
                AccountModel.handle == handle,
                AccountModel.deleted_at.is_(None),
            )
        )
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    async def save(
        self, account: Account, profile: StudentProfile | None = None
    ) -> None:
        """Create new account, and its student profile when given, in one commit.

        Nothing is persisted if either insert fails.

        Raises:
            IntegrityError: If email, handle or student number already exists.
        """
        try:
            self.session.add(self._to_model(account))
            if profile is not None:
                # Account row first; the profile references it
                await self.session.flush()
                self.session.add(profile_to_model(profile))
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def update(self, account: Account) -> None:
        """Persist mutable account fields and commit (releases any row lock).

        Raises:
            NoResultFound: If the account row no longer exists.
        """
        stmt = select(AccountModel).where(AccountModel.id == account.id)
        result = await self.session.execute(stmt)
        model = result.scalar_one()

        model.email = account.email
        model.handle = account.handle
        model.full_name = account.full_name
        model.role = account.role
        model.password_hash = account.password_hash
        model.data_processing_consent = account.data_processing_consent
        model.consent_given_at = account.consent_given_at
        model.failed_login_attempts = account.failed_login_attempts
        model.locked_until = account.locked_until
        model.last_login_at = account.last_login_at
        model.deleted_at = account.deleted_at
        model.show_grades = account.show_grades
        model.allow_search = account.allow_search
        model.share_with_parents = account.share_with_parents
        model.marketing_emails = account.marketing_emails
        model.updated_at = account.updated_at

        await self.session.commit()

    @staticmethod
    def _to_domain(model: AccountModel) -> Account:
        return Account(
            id=model.id,
            email=model.email,
            handle=model.handle,
            full_name=model.full_name,
            role=model.role,
            password_hash=model.password_hash,
            data_processing_consent=model.data_processing_consent,
            consent_given_at=model.consent_given_at,
            failed_login_attempts=model.failed_login_attempts,
            locked_until=model.locked_until,
            last_login_at=model.last_login_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
            deleted_at=model.deleted_at,
            show_grades=model.show_grades,
            allow_search=model.allow_search,
            share_with_parents=model.share_with_parents,
            marketing_emails=model.marketing_emails,
        )

    @staticmethod
    def _to_model(account: Account) -> AccountModel:
        return AccountModel(
            id=account.id,
            email=account.email,
            handle=account.handle,
            full_name=account.full_name,
            role=account.role,
            password_hash=account.password_hash,
            data_processing_consent=account.data_processing_consent,
            consent_given_at=account.consent_given_at,
            failed_login_attempts=account.failed_login_attempts,
            locked_until=account.locked_until,
            last_login_at=account.last_login_at,
            created_at=account.created_at,
            updated_at=account.updated_at,
            deleted_at=account.deleted_at,
            show_grades=account.show_grades,
            allow_search=account.allow_search,
            share_with_parents=account.share_with_parents,
            marketing_emails=account.marketing_emails,
        )
