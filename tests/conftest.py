"""Pytest configuration and shared fixtures.

This configuration provides:
1. Markers for the three test layers (unit, integration, api)
2. A pinned clock so lockout and consent expiry are deterministic
3. Entity builders with sensible defaults
4. An isolated in-memory SQLite database per test
"""

import inspect
from datetime import UTC, date, datetime, timedelta
from uuid import UUID

import pytest
import pytest_asyncio
from uuid_extensions import uuid7

from eduguard.domain.entities import Account, ConsentGrant, StudentProfile
from eduguard.domain.enums import AcademicStatus, ConsentKind
from eduguard.infrastructure.clock.system_clock import FixedClock
from eduguard.infrastructure.persistence.database import Database

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=UTC)


# Test helper functions for domain entities


def create_account(
    role: str = "student",
    email: str | None = None,
    handle: str | None = None,
    password_hash: str = "hashed_password",
    data_processing_consent: bool = True,
    consent_given_at: datetime | None = NOW,
    failed_login_attempts: int = 0,
    locked_until: datetime | None = None,
    allow_search: bool = False,
    deleted_at: datetime | None = None,
    account_id: UUID | None = None,
) -> Account:
    """Helper to create an Account for testing.

    Defaults to a student with recorded data processing consent and no
    lockout state.
    """
    account_id = account_id or uuid7()
    suffix = account_id.hex[-10:]
    return Account(
        id=account_id,
        email=email or f"{role}-{suffix}@school.test",
        handle=handle or f"{role}_{suffix}",
        full_name=f"Test {role.title()}",
        role=role,
        password_hash=password_hash,
        data_processing_consent=data_processing_consent,
        consent_given_at=consent_given_at if data_processing_consent else None,
        failed_login_attempts=failed_login_attempts,
        locked_until=locked_until,
        last_login_at=None,
        created_at=NOW,
        updated_at=NOW,
        deleted_at=deleted_at,
        allow_search=allow_search,
    )


def create_profile(
    account_id: UUID,
    birth_date: date = date(2000, 1, 1),
    grants: list[ConsentGrant] | None = None,
) -> StudentProfile:
    """Helper to create a StudentProfile (adult by default)."""
    profile_id = uuid7()
    return StudentProfile(
        id=profile_id,
        account_id=account_id,
        birth_date=birth_date,
        student_number=f"S{profile_id.hex[-8:].upper()}",
        grade_level=10,
        academic_status=AcademicStatus.ACTIVE,
        created_at=NOW,
        updated_at=NOW,
        grants=grants or [],
    )


def create_grant(
    student_profile_id: UUID,
    guardian_account_id: UUID | None = None,
    granted_at: datetime | None = NOW - timedelta(days=1),
    expires_at: datetime | None = NOW + timedelta(days=30),
    revoked_at: datetime | None = None,
    kind: ConsentKind = ConsentKind.GENERAL,
) -> ConsentGrant:
    """Helper to create a ConsentGrant (active at NOW by default)."""
    grant_id = uuid7()
    return ConsentGrant(
        id=grant_id,
        student_profile_id=student_profile_id,
        guardian_email="guardian@family.test",
        guardian_name="Test Guardian",
        guardian_account_id=guardian_account_id,
        kind=kind,
        consent_token=f"token-{grant_id.hex}",
        granted_at=granted_at,
        expires_at=expires_at,
        revoked_at=revoked_at,
        created_at=NOW - timedelta(days=1),
    )


@pytest.fixture
def clock() -> FixedClock:
    """Clock pinned to NOW; tests move it with advance()/set()."""
    return FixedClock(NOW)


@pytest_asyncio.fixture
async def database():
    """Fresh in-memory SQLite database with every table created."""
    db = Database("sqlite+aiosqlite:///:memory:")
    await db.create_all()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def session(database: Database):
    """Session on the test database (rolled back/closed after the test)."""
    async with database.async_session() as session:
        yield session


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database"
    )
    config.addinivalue_line("markers", "api: API tests through the FastAPI stack")


# Test execution configuration
def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions.

    This ensures all async tests are properly marked even if
    the developer forgets to add @pytest.mark.asyncio.
    """
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)
