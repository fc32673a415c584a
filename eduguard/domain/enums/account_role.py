"""Account roles.

Each role sees a structurally different slice of the school records:

    - student: own grades, assignments and submissions
    - teacher: records they teach, plus the student/teacher directory
    - parent: records of students who granted them active consent
    - admin: everything

Roles are persisted as plain text so a value outside this enum can exist in
storage (legacy rows, manual edits). Such accounts are denied everything by
the row-level security engine, never defaulted to a known role.
"""

from enum import Enum


class AccountRole(str, Enum):
    """Closed set of account roles."""

    STUDENT = "student"
    TEACHER = "teacher"
    PARENT = "parent"
    ADMIN = "admin"

    @classmethod
    def values(cls) -> list[str]:
        """Get all role values as strings."""
        return [role.value for role in cls]

    @classmethod
    def parse(cls, value: str | None) -> "AccountRole | None":
        """Parse a stored role string.

        Args:
            value: Raw role text from storage.

        Returns:
            The matching role, or None when the value is not a known role.
        """
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


SELF_REGISTRABLE_ROLES: frozenset[AccountRole] = frozenset(
    {AccountRole.STUDENT, AccountRole.TEACHER, AccountRole.PARENT}
)
