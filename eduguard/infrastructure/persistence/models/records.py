"""School record models scoped by row-level security.

Only the access-relevant columns are modelled; the rest of each record
belongs to the feature that owns it. Every model declares its EntityKind in
``__entity_kind__`` so the row-level security engine can dispatch on it.

Column conventions the engine relies on:
    - student_id: student the record is about (grades, assignments, submissions)
    - teacher_id: teacher responsible for the record
    - owner_id: generic owner column for default-scoped kinds
    - deleted_at: soft-delete marker (SoftDeleteMixin)
"""

from decimal import Decimal
from uuid import UUID

from sqlalchemy import ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from eduguard.domain.enums import EntityKind
from eduguard.infrastructure.persistence.base import BaseMutableModel, SoftDeleteMixin


class CourseModel(SoftDeleteMixin, BaseMutableModel):
    """Course taught by a teacher (no owner column)."""

    __tablename__ = "courses"
    __entity_kind__ = EntityKind.COURSE

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    teacher_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("accounts.id"), nullable=False, index=True
    )


class AssignmentModel(SoftDeleteMixin, BaseMutableModel):
    """Assignment issued to a student by a teacher."""

    __tablename__ = "assignments"
    __entity_kind__ = EntityKind.ASSIGNMENT

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    student_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("accounts.id"), nullable=False, index=True
    )
    teacher_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("accounts.id"), nullable=False, index=True
    )
    course_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("courses.id"), nullable=True
    )


class GradeModel(SoftDeleteMixin, BaseMutableModel):
    """Grade awarded to a student by a teacher."""

    __tablename__ = "grades"
    __entity_kind__ = EntityKind.GRADE

    student_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("accounts.id"), nullable=False, index=True
    )
    teacher_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("accounts.id"), nullable=False, index=True
    )
    assignment_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("assignments.id"), nullable=True
    )
    score: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)


class SubmissionModel(SoftDeleteMixin, BaseMutableModel):
    """Student submission for an assignment.

    Teachers reach submissions through the parent assignment's teacher_id.
    """

    __tablename__ = "submissions"
    __entity_kind__ = EntityKind.SUBMISSION

    student_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("accounts.id"), nullable=False, index=True
    )
    assignment_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("assignments.id"), nullable=False, index=True
    )
    body: Mapped[str | None] = mapped_column(Text, nullable=True)


class AnnouncementModel(SoftDeleteMixin, BaseMutableModel):
    """School announcement."""

    __tablename__ = "announcements"
    __entity_kind__ = EntityKind.ANNOUNCEMENT

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    author_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("accounts.id"), nullable=False
    )


class NotificationModel(SoftDeleteMixin, BaseMutableModel):
    """Notification addressed to one account."""

    __tablename__ = "notifications"
    __entity_kind__ = EntityKind.NOTIFICATION

    owner_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("accounts.id"), nullable=False, index=True
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
