"""Kinds of records the row-level security engine can scope.

Every persistence model that participates in row scoping declares its kind,
and the engine dispatches on (role, kind). Adding a member here forces every
branch of that dispatch to be revisited (``assert_never`` in the engine).
"""

from enum import Enum


class EntityKind(str, Enum):
    """Scoped record kinds."""

    GRADE = "grade"
    ASSIGNMENT = "assignment"
    SUBMISSION = "submission"
    USER = "user"
    ANNOUNCEMENT = "announcement"
    COURSE = "course"
    NOTIFICATION = "notification"
