"""End-to-end workflows against SQLite with real bcrypt (cost 4).

Covers registration, the lockout state machine with persisted state, token
issuance after login, and the guardian consent workflow feeding the consent
gate.
"""

from datetime import date, timedelta
from unittest.mock import AsyncMock

import pytest
from uuid_extensions import uuid7

from eduguard.application.commands.auth_commands import (
    AuthenticateAccount,
    IssueAccessToken,
    RegisterAccount,
)
from eduguard.application.commands.consent_commands import (
    GrantGuardianConsent,
    RevokeGuardianConsent,
)
from eduguard.application.commands.handlers import (
    AuthenticateAccountHandler,
    GrantGuardianConsentHandler,
    IssueAccessTokenHandler,
    RegisterAccountHandler,
    RevokeGuardianConsentHandler,
)
from eduguard.application.services import ConsentGate
from eduguard.core.enums import ErrorCode
from eduguard.core.errors import ConflictError, NotFoundError, ValidationError
from eduguard.core.result import Failure, Success
from eduguard.domain.enums import DenialKind
from eduguard.domain.errors import AccountLocked, InvalidCredentials
from eduguard.domain.events import AccountRegistered, GuardianConsentGranted
from eduguard.infrastructure.persistence.repositories import (
    AccessTokenRepository,
    AccountRepository,
    ConsentGrantRepository,
    StudentProfileRepository,
)
from eduguard.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from eduguard.infrastructure.security.token_digest import OpaqueTokenService, digest_token

PASSWORD = "Str0ng!Pass#2024"


@pytest.fixture
def password_service() -> BcryptPasswordService:
    return BcryptPasswordService(cost_factor=4)


@pytest.fixture
def event_bus() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def register(session, password_service, event_bus, clock) -> RegisterAccountHandler:
    return RegisterAccountHandler(
        account_repo=AccountRepository(session),
        profile_repo=StudentProfileRepository(session),
        password_service=password_service,
        event_bus=event_bus,
        clock=clock,
    )


@pytest.fixture
def authenticate(session, password_service, event_bus, clock) -> AuthenticateAccountHandler:
    return AuthenticateAccountHandler(
        account_repo=AccountRepository(session),
        password_service=password_service,
        event_bus=event_bus,
        clock=clock,
    )


def registration(**overrides) -> RegisterAccount:
    fields = {
        "email": "Student@School.test",
        "handle": "student1",
        "full_name": "Student One",
        "password": PASSWORD,
        "role": "student",
        "data_processing_consent": True,
        "birth_date": date(2012, 6, 1),
    }
    fields.update(overrides)
    return RegisterAccount(**fields)


@pytest.mark.integration
class TestRegistration:
    """Test RegisterAccountHandler."""

    @pytest.mark.asyncio
    async def test_register_student_creates_profile(
        self, session, register, event_bus, clock
    ):
        result = await register.handle(registration())

        assert isinstance(result, Success)
        account = result.value
        assert account.email == "student@school.test"
        assert account.consent_given_at == clock.now()
        assert account.password_hash.startswith("$2b$04$")

        profile = await StudentProfileRepository(session).find_by_account_id(account.id)
        assert profile is not None
        assert profile.student_number.startswith("S")
        assert profile.requires_guardian_consent(clock.now().date()) is True

        event = event_bus.publish.call_args.args[0]
        assert isinstance(event, AccountRegistered)
        assert event.role == "student"

    @pytest.mark.asyncio
    async def test_weak_password_rejected(self, register):
        result = await register.handle(registration(password="WeakPassword!"))

        assert isinstance(result, Failure)
        assert isinstance(result.error, ValidationError)
        assert result.error.code is ErrorCode.PASSWORD_TOO_WEAK
        assert result.error.field == "password"
        assert result.error.message == "Password must contain at least one number"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role", ["admin", "janitor"])
    async def test_role_must_be_self_registrable(self, register, role):
        result = await register.handle(registration(role=role))

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.VALIDATION_ERROR
        assert result.error.field == "role"

    @pytest.mark.asyncio
    async def test_duplicate_email_is_case_insensitive(self, register):
        await register.handle(registration())

        result = await register.handle(
            registration(email="STUDENT@school.test", handle="other")
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, ConflictError)
        assert result.error.conflicting_field == "email"

    @pytest.mark.asyncio
    async def test_duplicate_handle(self, register):
        await register.handle(registration())

        result = await register.handle(registration(email="other@school.test"))

        assert isinstance(result, Failure)
        assert result.error.conflicting_field == "handle"

    @pytest.mark.asyncio
    async def test_student_requires_birth_date(self, session, register, event_bus):
        result = await register.handle(registration(birth_date=None))

        assert isinstance(result, Failure)
        assert isinstance(result.error, ValidationError)
        assert result.error.code is ErrorCode.VALIDATION_ERROR
        assert result.error.field == "birth_date"
        assert await AccountRepository(session).exists_by_email(
            "student@school.test"
        ) is False
        event_bus.publish.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicate_student_number_persists_nothing(self, session, register):
        first = await register.handle(registration(student_number="S-1"))
        assert isinstance(first, Success)

        result = await register.handle(
            registration(
                email="second@school.test", handle="student2", student_number="S-1"
            )
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, ConflictError)
        assert result.error.conflicting_field == "student_number"
        assert await AccountRepository(session).exists_by_email(
            "second@school.test"
        ) is False

    @pytest.mark.asyncio
    async def test_registered_student_passes_consent_gate_lookup(
        self, session, register, clock
    ):
        result = await register.handle(registration(birth_date=date(2000, 1, 1)))
        assert isinstance(result, Success)
        gate = ConsentGate(profile_repo=StudentProfileRepository(session), clock=clock)

        decision = await gate.check(result.value)

        assert decision.allowed

    @pytest.mark.asyncio
    async def test_teacher_has_no_profile(self, session, register):
        result = await register.handle(
            registration(role="teacher", handle="teach", birth_date=None)
        )

        assert isinstance(result, Success)
        assert (
            await StudentProfileRepository(session).find_by_account_id(result.value.id)
            is None
        )


@pytest.mark.integration
class TestLockoutPersistence:
    """The lockout state machine with state persisted between attempts."""

    @pytest.mark.asyncio
    async def test_five_failures_lock_then_expire(
        self, session, register, authenticate, clock
    ):
        await register.handle(registration(role="teacher", birth_date=None))
        wrong = AuthenticateAccount(email="student@school.test", password="Wr0ng!Pass#x")
        right = AuthenticateAccount(email="STUDENT@school.test", password=PASSWORD)

        for remaining in (4, 3, 2, 1):
            result = await authenticate.handle(wrong)
            assert isinstance(result, Failure)
            assert result.error == InvalidCredentials(attempts_remaining=remaining)

        locked = await authenticate.handle(wrong)
        assert isinstance(locked, Failure)
        assert isinstance(locked.error, AccountLocked)
        assert locked.error.minutes_remaining == 15

        stored = await AccountRepository(session).find_by_email_for_update(
            "student@school.test"
        )
        assert stored.failed_login_attempts == 5
        assert stored.locked_until == clock.now() + timedelta(minutes=15)

        # Right password while locked is still refused
        clock.advance(timedelta(minutes=10))
        still_locked = await authenticate.handle(right)
        assert isinstance(still_locked, Failure)
        assert still_locked.error.minutes_remaining == 5

        clock.advance(timedelta(minutes=5))
        unlocked = await authenticate.handle(right)
        assert isinstance(unlocked, Success)

        stored = await AccountRepository(session).find_by_email_for_update(
            "student@school.test"
        )
        assert stored.failed_login_attempts == 0
        assert stored.locked_until is None
        assert stored.last_login_at == clock.now()

    @pytest.mark.asyncio
    async def test_repeated_successful_logins_keep_counter_at_zero(
        self, session, register, authenticate, clock
    ):
        await register.handle(registration(role="teacher", birth_date=None))
        wrong = AuthenticateAccount(email="student@school.test", password="Wr0ng!Pass#x")
        right = AuthenticateAccount(email="student@school.test", password=PASSWORD)
        await authenticate.handle(wrong)

        first = await authenticate.handle(right)
        clock.advance(timedelta(minutes=1))
        second = await authenticate.handle(right)

        assert isinstance(first, Success)
        assert isinstance(second, Success)
        stored = await AccountRepository(session).find_by_email("student@school.test")
        assert stored.failed_login_attempts == 0
        assert stored.locked_until is None
        assert stored.last_login_at == clock.now()

    @pytest.mark.asyncio
    async def test_unknown_email(self, authenticate, event_bus):
        result = await authenticate.handle(
            AuthenticateAccount(email="ghost@school.test", password=PASSWORD)
        )

        assert isinstance(result, Failure)
        assert result.error == InvalidCredentials()
        assert event_bus.publish.call_args.args[0].reason == (
            DenialKind.INVALID_CREDENTIALS.value
        )


@pytest.mark.integration
class TestGuardianConsentWorkflow:
    """Granting and revoking consent drives the consent gate."""

    @pytest.mark.asyncio
    async def test_grant_and_revoke(self, session, register, event_bus, clock):
        student = (await register.handle(registration())).value
        profiles = StudentProfileRepository(session)
        grants = ConsentGrantRepository(session)
        gate = ConsentGate(profile_repo=profiles, clock=clock)

        assert (await gate.check(student)).kind is DenialKind.GUARDIAN_CONSENT_REQUIRED

        granted = await GrantGuardianConsentHandler(
            profile_repo=profiles, grant_repo=grants, event_bus=event_bus, clock=clock
        ).handle(
            GrantGuardianConsent(
                student_account_id=student.id,
                guardian_email="Parent@Family.test",
                guardian_name="Parent",
            )
        )
        assert isinstance(granted, Success)
        assert granted.value.guardian_email == "parent@family.test"
        assert granted.value.expires_at == clock.now() + timedelta(days=365)
        assert isinstance(event_bus.publish.call_args.args[0], GuardianConsentGranted)

        assert (await gate.check(student)).allowed is True

        revoke = RevokeGuardianConsentHandler(
            grant_repo=grants, event_bus=event_bus, clock=clock
        )
        assert isinstance(
            await revoke.handle(RevokeGuardianConsent(grant_id=granted.value.id)),
            Success,
        )
        assert (await gate.check(student)).denied is True

        again = await revoke.handle(RevokeGuardianConsent(grant_id=granted.value.id))
        assert isinstance(again, Failure)
        assert again.error.code is ErrorCode.CONSENT_ALREADY_REVOKED

    @pytest.mark.asyncio
    async def test_grant_expires_with_ttl(self, session, register, event_bus, clock):
        student = (await register.handle(registration())).value
        profiles = StudentProfileRepository(session)
        gate = ConsentGate(profile_repo=profiles, clock=clock)

        await GrantGuardianConsentHandler(
            profile_repo=profiles,
            grant_repo=ConsentGrantRepository(session),
            event_bus=event_bus,
            clock=clock,
        ).handle(
            GrantGuardianConsent(
                student_account_id=student.id,
                guardian_email="parent@family.test",
                guardian_name="Parent",
                ttl=timedelta(days=7),
            )
        )

        assert (await gate.check(student)).allowed is True
        clock.advance(timedelta(days=7))
        assert (await gate.check(student)).denied is True

    @pytest.mark.asyncio
    async def test_grant_for_unknown_student(self, session, event_bus, clock):
        result = await GrantGuardianConsentHandler(
            profile_repo=StudentProfileRepository(session),
            grant_repo=ConsentGrantRepository(session),
            event_bus=event_bus,
            clock=clock,
        ).handle(
            GrantGuardianConsent(
                student_account_id=uuid7(),
                guardian_email="parent@family.test",
                guardian_name="Parent",
            )
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, NotFoundError)

    @pytest.mark.asyncio
    async def test_revoke_unknown_grant(self, session, event_bus, clock):
        result = await RevokeGuardianConsentHandler(
            grant_repo=ConsentGrantRepository(session),
            event_bus=event_bus,
            clock=clock,
        ).handle(RevokeGuardianConsent(grant_id=uuid7()))

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.NOT_FOUND


@pytest.mark.integration
class TestAccessTokenIssuance:
    """Login followed by IssueAccessTokenHandler."""

    @pytest.mark.asyncio
    async def test_issued_token_resolves_by_digest(
        self, session, register, authenticate, clock
    ):
        await register.handle(registration(role="teacher", birth_date=None))
        login = await authenticate.handle(
            AuthenticateAccount(email="student@school.test", password=PASSWORD)
        )
        assert isinstance(login, Success)
        handler = IssueAccessTokenHandler(
            token_repo=AccessTokenRepository(session),
            token_service=OpaqueTokenService(),
            clock=clock,
            lifetime=timedelta(minutes=60),
        )

        result = await handler.handle(IssueAccessToken(account_id=login.value.id))

        assert isinstance(result, Success)
        issued = result.value
        assert issued.expires_at == clock.now() + timedelta(minutes=60)
        stored = await AccessTokenRepository(session).find_by_hash(
            digest_token(issued.token)
        )
        assert stored is not None
        assert stored.account_id == login.value.id
        assert stored.token_hash != issued.token
        assert stored.is_usable(clock.now())
        assert not stored.is_usable(issued.expires_at)
