"""Unit tests for the row lock taken by AccountRepository.find_by_email_for_update.

SQLite ignores FOR UPDATE, so the integration suite cannot see the lock.
These tests compile the issued statement for PostgreSQL instead.
"""

from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.ext.asyncio import AsyncSession

from eduguard.infrastructure.persistence.repositories import AccountRepository


def make_session() -> AsyncMock:
    session = AsyncMock(spec=AsyncSession)
    result = Mock()
    result.scalar_one_or_none.return_value = None
    session.execute.return_value = result
    return session


def issued_sql(session: AsyncMock) -> str:
    stmt = session.execute.call_args.args[0]
    return str(stmt.compile(dialect=postgresql.dialect()))


@pytest.mark.unit
class TestAccountRowLock:
    """Concurrent logins for one account serialise on its row."""

    @pytest.mark.asyncio
    async def test_find_for_update_locks_row(self):
        session = make_session()

        found = await AccountRepository(session).find_by_email_for_update(
            "Student@School.test"
        )

        assert found is None
        sql = issued_sql(session)
        assert sql.rstrip().endswith("FOR UPDATE")
        assert "lower(accounts.email)" in sql
        assert "accounts.deleted_at IS NULL" in sql

    @pytest.mark.asyncio
    async def test_plain_find_does_not_lock(self):
        session = make_session()

        await AccountRepository(session).find_by_email("student@school.test")

        assert "FOR UPDATE" not in issued_sql(session)
