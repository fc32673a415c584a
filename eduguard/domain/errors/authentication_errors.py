"""Authentication failures returned by the credential workflow.

Both are data (returned inside Failure), not exceptions.

    - InvalidCredentials: unknown email or wrong password. attempts_remaining
      is None for an unknown email so the response does not reveal whether an
      account exists beyond what the plain error already says.
    - AccountLocked: a lockout is in force; carries its end and the minutes
      remaining, rounded up.
"""

from dataclasses import dataclass
from datetime import datetime

from eduguard.core.enums import ErrorCode
from eduguard.core.errors import AuthenticationError

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def locked_message(minutes_remaining: int) -> str:
    """Human-readable lockout message."""
    unit = "minute" if minutes_remaining == 1 else "minutes"
    return (
        "Account is temporarily locked due to too many failed login attempts. "
        f"Try again in {minutes_remaining} {unit}."
    )


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidCredentials(AuthenticationError):
    """Unknown email or wrong password.

    Attributes:
        attempts_remaining: Failures left before lockout (None for unknown email).
    """

    code: ErrorCode = ErrorCode.INVALID_CREDENTIALS
    message: str = INVALID_CREDENTIALS_MESSAGE
    attempts_remaining: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AccountLocked(AuthenticationError):
    """Authentication refused because a lockout is in force.

    Attributes:
        locked_until: End of the lockout.
        minutes_remaining: Whole minutes until unlock, rounded up.
    """

    locked_until: datetime
    minutes_remaining: int
    code: ErrorCode = ErrorCode.ACCOUNT_LOCKED
    message: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            object.__setattr__(self, "message", locked_message(self.minutes_remaining))
