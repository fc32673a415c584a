"""Register account handler.

Flow:
1. Validate role (student, teacher or parent; admins are provisioned, not registered)
2. Students must give a birth date (the consent gate needs their profile)
3. Validate password against the password policy
4. Check email, handle and student number uniqueness (email case-insensitive)
5. Hash password; persist the account and, for students, the profile in one
   transaction
6. Emit AccountRegistered event
7. Return Success(Account)

Validation failures are returned before any persistence and never touch the
lockout state of an existing account.
"""

from uuid_extensions import uuid7

from eduguard.application.commands.auth_commands import RegisterAccount
from eduguard.core.enums import ErrorCode
from eduguard.core.errors import ConflictError, DomainError, ValidationError
from eduguard.core.result import Failure, Result, Success
from eduguard.domain.entities import Account, StudentProfile
from eduguard.domain.enums import SELF_REGISTRABLE_ROLES, AcademicStatus, AccountRole
from eduguard.domain.events import AccountRegistered
from eduguard.domain.policies import PasswordPolicy, Rejected
from eduguard.domain.protocols import (
    AccountRepository,
    ClockProtocol,
    EventBusProtocol,
    PasswordHashingProtocol,
    StudentProfileRepository,
)


class RegistrationError:
    """Registration-specific error messages."""

    INVALID_ROLE = "Role must be one of: parent, student, teacher"
    EMAIL_ALREADY_EXISTS = "Email already registered"
    HANDLE_ALREADY_EXISTS = "Handle already taken"
    BIRTH_DATE_REQUIRED = "Birth date is required for student accounts"
    STUDENT_NUMBER_ALREADY_EXISTS = "Student number already registered"


class RegisterAccountHandler:
    """Handler for the RegisterAccount command."""

    def __init__(
        self,
        account_repo: AccountRepository,
        profile_repo: StudentProfileRepository,
        password_service: PasswordHashingProtocol,
        event_bus: EventBusProtocol,
        clock: ClockProtocol,
        password_policy: PasswordPolicy | None = None,
    ) -> None:
        self._account_repo = account_repo
        self._profile_repo = profile_repo
        self._password_service = password_service
        self._event_bus = event_bus
        self._clock = clock
        self._password_policy = password_policy or PasswordPolicy()

    async def handle(self, cmd: RegisterAccount) -> Result[Account, DomainError]:
        """Handle account registration.

        Returns:
            Success(Account) once persisted.
            Failure(ValidationError) for a bad role, a student without a
                birth date or a weak password.
            Failure(ConflictError) for a duplicate email, handle or student
                number.
        """
        # Step 1: Role
        role = AccountRole.parse(cmd.role)
        if role is None or role not in SELF_REGISTRABLE_ROLES:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_ERROR,
                    message=RegistrationError.INVALID_ROLE,
                    field="role",
                )
            )

        # Step 2: Students need a birth date
        if role is AccountRole.STUDENT and cmd.birth_date is None:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_ERROR,
                    message=RegistrationError.BIRTH_DATE_REQUIRED,
                    field="birth_date",
                )
            )

        # Step 3: Password policy
        verdict = self._password_policy.evaluate(cmd.password)
        if isinstance(verdict, Rejected):
            return Failure(
                error=ValidationError(
                    code=ErrorCode.PASSWORD_TOO_WEAK,
                    message=verdict.reason,
                    field="password",
                )
            )

        # Step 4: Uniqueness
        email = cmd.email.strip().lower()
        if await self._account_repo.exists_by_email(email):
            return Failure(
                error=ConflictError(
                    code=ErrorCode.DUPLICATE_RESOURCE,
                    message=RegistrationError.EMAIL_ALREADY_EXISTS,
                    resource_type="Account",
                    conflicting_field="email",
                )
            )
        if await self._account_repo.exists_by_handle(cmd.handle):
            return Failure(
                error=ConflictError(
                    code=ErrorCode.DUPLICATE_RESOURCE,
                    message=RegistrationError.HANDLE_ALREADY_EXISTS,
                    resource_type="Account",
                    conflicting_field="handle",
                )
            )
        if (
            role is AccountRole.STUDENT
            and cmd.student_number is not None
            and await self._profile_repo.exists_by_student_number(cmd.student_number)
        ):
            return Failure(
                error=ConflictError(
                    code=ErrorCode.DUPLICATE_RESOURCE,
                    message=RegistrationError.STUDENT_NUMBER_ALREADY_EXISTS,
                    resource_type="StudentProfile",
                    conflicting_field="student_number",
                )
            )

        # Step 5: Persist account and profile together
        now = self._clock.now()
        account = Account(
            id=uuid7(),
            email=email,
            handle=cmd.handle,
            full_name=cmd.full_name,
            role=role.value,
            password_hash=self._password_service.hash_password(cmd.password),
            data_processing_consent=cmd.data_processing_consent,
            consent_given_at=now if cmd.data_processing_consent else None,
            failed_login_attempts=0,
            locked_until=None,
            last_login_at=None,
            created_at=now,
            updated_at=now,
        )
        profile = None
        if role is AccountRole.STUDENT:
            assert cmd.birth_date is not None
            profile = StudentProfile(
                id=uuid7(),
                account_id=account.id,
                birth_date=cmd.birth_date,
                student_number=cmd.student_number or f"S{account.id.hex[-8:].upper()}",
                grade_level=cmd.grade_level,
                academic_status=AcademicStatus.ACTIVE,
                created_at=now,
                updated_at=now,
            )
        await self._account_repo.save(account, profile=profile)

        # Step 6: Emit event
        await self._event_bus.publish(
            AccountRegistered(
                occurred_at=now,
                account_id=account.id,
                email=account.email,
                role=account.role,
            )
        )
        return Success(value=account)
