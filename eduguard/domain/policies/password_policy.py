"""Password complexity policy.

Stateless evaluation of password candidates at registration and password
change. Rules are checked in a fixed order and the first failure is the one
reported, so the message a user sees is deterministic.

Rules (in order):
    1. 8 <= length <= 128
    2. at least one uppercase letter
    3. at least one lowercase letter
    4. at least one digit
    5. at least one special character from ``!@#$%^&*()_+-=[]{}|;:,.<>?``
    6. no common password (case-insensitive substring match)
    7. no ascending run of three letters or digits (``abc``, ``789``)
    8. no character repeated three or more times in a row

A separate strength score (0-4) backs UI feedback and never rejects.

Usage:
    policy = PasswordPolicy()
    match policy.evaluate("Str0ng!Pass#2024"):
        case Accepted():
            ...
        case Rejected(reason=reason):
            ...
"""

import re
from dataclasses import dataclass, field

MIN_LENGTH = 8
MAX_LENGTH = 128
STRONG_LENGTH = 12
MAX_SCORE = 4
COMMON_PATTERN_PENALTY = 2

SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{}|;:,.<>?"

COMMON_PASSWORDS: tuple[str, ...] = (
    "password",
    "password123",
    "123456",
    "12345678",
    "qwerty",
    "abc123",
    "letmein",
    "welcome",
    "monkey",
    "dragon",
    "master",
    "sunshine",
    "princess",
    "football",
    "baseball",
)

_DIGITS = "0123456789"
_LETTERS = "abcdefghijklmnopqrstuvwxyz"

# 012..789 and abc..xyz
SEQUENTIAL_TRIGRAPHS: tuple[str, ...] = tuple(
    run[i : i + 3] for run in (_DIGITS, _LETTERS) for i in range(len(run) - 2)
)

_UPPERCASE = re.compile(r"[A-Z]")
_LOWERCASE = re.compile(r"[a-z]")
_DIGIT = re.compile(r"[0-9]")
_SPECIAL = re.compile("[" + re.escape(SPECIAL_CHARACTERS) + "]")
_SEQUENTIAL = re.compile("|".join(SEQUENTIAL_TRIGRAPHS), re.IGNORECASE)
_REPEATED = re.compile(r"(.)\1{2,}")


class PasswordRejection:
    """Rejection messages, shown to the user verbatim."""

    TOO_SHORT = f"Password must be at least {MIN_LENGTH} characters long"
    TOO_LONG = f"Password cannot exceed {MAX_LENGTH} characters"
    MISSING_UPPERCASE = "Password must contain at least one uppercase letter"
    MISSING_LOWERCASE = "Password must contain at least one lowercase letter"
    MISSING_DIGIT = "Password must contain at least one number"
    MISSING_SPECIAL = (
        f"Password must contain at least one special character ({SPECIAL_CHARACTERS})"
    )
    COMMON_PATTERN = "Password contains a common pattern and is too weak"
    SEQUENTIAL = "Password cannot contain sequential characters"
    REPEATED = 'Password cannot contain repeated characters (e.g., "aaa" or "111")'


class PasswordFeedback:
    """Strength feedback strings."""

    REQUIRED = "Password is required"
    TOO_SHORT = f"Use at least {MIN_LENGTH} characters"
    LONGER = f"Consider using {STRONG_LENGTH}+ characters for better security"
    MIX_CASE = "Mix uppercase and lowercase letters"
    ADD_DIGIT = "Include at least one number"
    ADD_SPECIAL = "Add special characters for extra security"
    AVOID_COMMON = "Avoid common password patterns"


@dataclass(frozen=True, slots=True)
class Accepted:
    """Candidate satisfies every rule."""


@dataclass(frozen=True, slots=True)
class Rejected:
    """Candidate failed a rule.

    Attributes:
        reason: Message of the first failing rule.
    """

    reason: str


type PasswordVerdict = Accepted | Rejected


@dataclass(frozen=True, slots=True)
class PasswordStrength:
    """Strength score for UI feedback.

    Attributes:
        score: 0 (weakest) to 4 (strongest).
        feedback: Suggestions for a stronger password.
    """

    score: int
    feedback: tuple[str, ...] = field(default_factory=tuple)


def contains_common_password(candidate: str) -> bool:
    """True if any denylisted password occurs in ``candidate`` (case-insensitive)."""
    lowered = candidate.lower()
    return any(common in lowered for common in COMMON_PASSWORDS)


class PasswordPolicy:
    """Password complexity rules and strength scoring.

    Stateless; one instance can be shared across requests.
    """

    def evaluate(self, candidate: str) -> PasswordVerdict:
        """Check a candidate against every rule.

        Args:
            candidate: Plaintext password.

        Returns:
            Accepted, or Rejected carrying the first failing rule's message.
        """
        reason = self._first_violation(candidate)
        if reason is None:
            return Accepted()
        return Rejected(reason=reason)

    def score(self, candidate: str) -> PasswordStrength:
        """Score a candidate from 0 to 4.

        +1 for length >= 8, +1 for length >= 12, +1 for mixed case,
        +1 for a digit, +1 for a special character; a denylisted substring
        subtracts 2 (floored at 0); the total is capped at 4.
        """
        if not candidate:
            return PasswordStrength(score=0, feedback=(PasswordFeedback.REQUIRED,))

        feedback: list[str] = []
        score = 0

        if len(candidate) >= MIN_LENGTH:
            score += 1
        else:
            feedback.append(PasswordFeedback.TOO_SHORT)

        if len(candidate) >= STRONG_LENGTH:
            score += 1
        elif len(candidate) >= MIN_LENGTH:
            feedback.append(PasswordFeedback.LONGER)

        if _UPPERCASE.search(candidate) and _LOWERCASE.search(candidate):
            score += 1
        else:
            feedback.append(PasswordFeedback.MIX_CASE)

        if _DIGIT.search(candidate):
            score += 1
        else:
            feedback.append(PasswordFeedback.ADD_DIGIT)

        if _SPECIAL.search(candidate):
            score += 1
        else:
            feedback.append(PasswordFeedback.ADD_SPECIAL)

        if contains_common_password(candidate):
            score = max(0, score - COMMON_PATTERN_PENALTY)
            feedback.append(PasswordFeedback.AVOID_COMMON)

        return PasswordStrength(score=min(MAX_SCORE, score), feedback=tuple(feedback))

    def _first_violation(self, candidate: str) -> str | None:
        if len(candidate) < MIN_LENGTH:
            return PasswordRejection.TOO_SHORT
        if len(candidate) > MAX_LENGTH:
            return PasswordRejection.TOO_LONG
        if not _UPPERCASE.search(candidate):
            return PasswordRejection.MISSING_UPPERCASE
        if not _LOWERCASE.search(candidate):
            return PasswordRejection.MISSING_LOWERCASE
        if not _DIGIT.search(candidate):
            return PasswordRejection.MISSING_DIGIT
        if not _SPECIAL.search(candidate):
            return PasswordRejection.MISSING_SPECIAL
        if contains_common_password(candidate):
            return PasswordRejection.COMMON_PATTERN
        if _SEQUENTIAL.search(candidate):
            return PasswordRejection.SEQUENTIAL
        if _REPEATED.search(candidate):
            return PasswordRejection.REPEATED
        return None
