"""Account database model.

Security:
    - password_hash: bcrypt hash, never plaintext
    - failed_login_attempts / locked_until: progressive lockout state
    - role: plain text so unrecognised values survive a round-trip and are
      denied by row-level security instead of failing to load

GDPR:
    - data_processing_consent + consent_given_at: both required by the
      consent gate
    - show_grades / allow_search / share_with_parents / marketing_emails:
      per-account preferences (allow_search feeds the student directory rule)
"""

from datetime import datetime

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from eduguard.domain.enums import EntityKind
from eduguard.infrastructure.persistence.base import (
    BaseMutableModel,
    SoftDeleteMixin,
    UTCDateTime,
)


class AccountModel(SoftDeleteMixin, BaseMutableModel):
    """Account row; the USER entity for row-level security.

    Indexes:
        - email (unique), handle (unique)
        - role for directory queries
    """

    __tablename__ = "accounts"
    __entity_kind__ = EntityKind.USER

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Account email address (unique, lowercase)",
    )
    handle: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        comment="Public handle (unique)",
    )
    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name",
    )
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        index=True,
        comment="student | teacher | parent | admin",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password",
    )

    # Consent
    data_processing_consent: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Data processing consent given",
    )
    consent_given_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime,
        nullable=True,
        comment="When data processing consent was recorded",
    )

    # Lockout
    failed_login_attempts: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Consecutive failed logins (reset on success)",
    )
    locked_until: Mapped[datetime | None] = mapped_column(
        UTCDateTime,
        nullable=True,
        comment="End of the current lockout",
    )
    last_login_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime,
        nullable=True,
        comment="Last successful authentication",
    )

    # GDPR preferences
    show_grades: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    allow_search: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Visible in other students' directory queries",
    )
    share_with_parents: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    marketing_emails: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
