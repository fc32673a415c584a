"""Student profile and guardian consent grant models."""

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from eduguard.infrastructure.persistence.base import (
    BaseModel,
    BaseMutableModel,
    UTCDateTime,
)


class StudentProfileModel(BaseMutableModel):
    """Student-only attributes, 1:1 with a student account."""

    __tablename__ = "student_profiles"

    account_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        comment="Owning student account",
    )
    birth_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="Date of birth (drives guardian consent requirement)",
    )
    student_number: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        comment="School-issued student number",
    )
    grade_level: Mapped[int] = mapped_column(Integer, nullable=False)
    academic_status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="active",
        comment="active | suspended | graduated | expelled",
    )

    grants: Mapped[list["ConsentGrantModel"]] = relationship(
        back_populates="student_profile",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="ConsentGrantModel.created_at",
    )


class ConsentGrantModel(BaseModel):
    """Guardian consent grant.

    Active iff granted_at IS NOT NULL AND revoked_at IS NULL AND
    (expires_at IS NULL OR expires_at > now); evaluated at read time.
    """

    __tablename__ = "consent_grants"

    student_profile_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("student_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    guardian_email: Mapped[str] = mapped_column(String(255), nullable=False)
    guardian_name: Mapped[str] = mapped_column(String(255), nullable=False)
    guardian_account_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("accounts.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="Parent account linked to the grant (drives parent row scoping)",
    )
    kind: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        comment="general | grades_view | data_export | external_links",
    )
    consent_token: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        comment="Opaque token for the guardian confirmation flow",
    )
    granted_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    expires_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    revoked_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(500), nullable=True)

    student_profile: Mapped[StudentProfileModel] = relationship(
        back_populates="grants",
    )
