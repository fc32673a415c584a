"""Student profile entity.

A profile holds the student-only attributes of a student account, including
the birth date that decides whether guardian consent is needed.

Date of digital consent:
    birth date + 16 years (configurable). A birthday on 29 February rolls to
    1 March in non-leap years, so such a student needs consent for one extra
    day rather than one day less.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from eduguard.domain.entities.consent_grant import ConsentGrant
from eduguard.domain.enums import AcademicStatus

DEFAULT_CONSENT_AGE = 16


@dataclass
class StudentProfile:
    """Student-specific data attached 1:1 to a student account.

    Attributes:
        id: Profile identifier.
        account_id: Owning student account.
        birth_date: Date of birth.
        student_number: School-issued student number.
        grade_level: Current grade level.
        academic_status: Enrollment status.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
        grants: Guardian consent grants recorded for the student.
    """

    id: UUID
    account_id: UUID
    birth_date: date
    student_number: str
    grade_level: int
    academic_status: AcademicStatus
    created_at: datetime
    updated_at: datetime
    grants: list[ConsentGrant] = field(default_factory=list)

    def digital_consent_date(self, consent_age: int = DEFAULT_CONSENT_AGE) -> date:
        """First day on which the student may consent on their own behalf."""
        year = self.birth_date.year + consent_age
        try:
            return self.birth_date.replace(year=year)
        except ValueError:
            # 29 February in a non-leap target year
            return date(year, 3, 1)

    def requires_guardian_consent(
        self, today: date, consent_age: int = DEFAULT_CONSENT_AGE
    ) -> bool:
        """True while the student is younger than the age of digital consent."""
        return today < self.digital_consent_date(consent_age)

    def active_grants(self, now: datetime) -> list[ConsentGrant]:
        """Grants in force at ``now``."""
        return [grant for grant in self.grants if grant.is_active(now)]

    def has_active_guardian_consent(self, now: datetime) -> bool:
        """True if at least one grant of any kind is active."""
        return bool(self.active_grants(now))
