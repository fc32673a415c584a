"""Authentication and registration commands (write operations).

Commands represent caller intent to change system state.
All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic
- Handlers return Result types
"""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class AuthenticateAccount:
    """Verify credentials and advance the lockout state machine.

    Attributes:
        email: Email the caller supplied (matched case-insensitively).
        password: Plaintext password. Never logged.

    Example:
        >>> command = AuthenticateAccount(
        ...     email="student@school.test",
        ...     password="Str0ng!Pass#2024",
        ... )
        >>> result = await handler.handle(command)
        >>> # Returns Success(Account), Failure(InvalidCredentials) or Failure(AccountLocked)
    """

    email: str
    password: str


@dataclass(frozen=True, kw_only=True)
class RegisterAccount:
    """Register a new self-service account.

    Admin accounts are never self-registered.

    Attributes:
        email: Unique email (case-insensitive).
        handle: Unique public handle.
        full_name: Display name.
        password: Plaintext password, checked against the password policy.
        role: student, teacher or parent.
        data_processing_consent: Whether the caller accepted data processing.
        birth_date: Student birth date; creates the student profile when given.
        student_number: School-issued number for the student profile.
        grade_level: Grade level for the student profile.
    """

    email: str
    handle: str
    full_name: str
    password: str
    role: str
    data_processing_consent: bool = False
    birth_date: date | None = None
    student_number: str | None = None
    grade_level: int = 1


@dataclass(frozen=True, kw_only=True)
class IssueAccessToken:
    """Issue an opaque bearer token for an authenticated account.

    Attributes:
        account_id: Account the token will authenticate.
    """

    account_id: UUID


@dataclass(frozen=True, kw_only=True)
class IssuedAccessToken:
    """Raw token returned to the client exactly once.

    Attributes:
        token: Raw bearer token (never persisted).
        expires_at: End of the token's lifetime.
    """

    token: str
    expires_at: datetime
