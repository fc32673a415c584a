"""Academic status of a student profile."""

from enum import Enum


class AcademicStatus(str, Enum):
    """Enrollment status of a student."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    GRADUATED = "graduated"
    EXPELLED = "expelled"
