"""Create access control tables

Revision ID: 3f9c2a71d4e8
Revises:
Create Date: 2026-10-18 00:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f9c2a71d4e8"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(mutable: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]
    if mutable:
        columns.append(
            sa.Column(
                "updated_at",
                sa.DateTime(timezone=True),
                server_default=sa.text("now()"),
                nullable=False,
            )
        )
    return columns


def _deleted_at() -> sa.Column:
    return sa.Column(
        "deleted_at",
        sa.DateTime(timezone=True),
        nullable=True,
        comment="Soft-delete marker (NULL = live row)",
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "accounts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "email",
            sa.String(length=255),
            nullable=False,
            comment="Account email address (unique, lowercase)",
        ),
        sa.Column(
            "handle", sa.String(length=50), nullable=False, comment="Public handle (unique)"
        ),
        sa.Column(
            "full_name", sa.String(length=255), nullable=False, comment="Display name"
        ),
        sa.Column(
            "role",
            sa.String(length=20),
            nullable=False,
            comment="student | teacher | parent | admin",
        ),
        sa.Column(
            "password_hash",
            sa.String(length=255),
            nullable=False,
            comment="Bcrypt hashed password",
        ),
        sa.Column(
            "data_processing_consent",
            sa.Boolean(),
            nullable=False,
            comment="Data processing consent given",
        ),
        sa.Column(
            "consent_given_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="When data processing consent was recorded",
        ),
        sa.Column(
            "failed_login_attempts",
            sa.Integer(),
            nullable=False,
            comment="Consecutive failed logins (reset on success)",
        ),
        sa.Column(
            "locked_until",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="End of the current lockout",
        ),
        sa.Column(
            "last_login_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="Last successful authentication",
        ),
        sa.Column("show_grades", sa.Boolean(), nullable=False),
        sa.Column(
            "allow_search",
            sa.Boolean(),
            nullable=False,
            comment="Visible in other students' directory queries",
        ),
        sa.Column("share_with_parents", sa.Boolean(), nullable=False),
        sa.Column("marketing_emails", sa.Boolean(), nullable=False),
        _deleted_at(),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("handle"),
    )
    op.create_index(op.f("ix_accounts_email"), "accounts", ["email"], unique=True)
    op.create_index(op.f("ix_accounts_role"), "accounts", ["role"], unique=False)

    op.create_table(
        "student_profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "account_id", sa.Uuid(), nullable=False, comment="Owning student account"
        ),
        sa.Column(
            "birth_date",
            sa.Date(),
            nullable=False,
            comment="Date of birth (drives guardian consent requirement)",
        ),
        sa.Column(
            "student_number",
            sa.String(length=50),
            nullable=False,
            comment="School-issued student number",
        ),
        sa.Column("grade_level", sa.Integer(), nullable=False),
        sa.Column(
            "academic_status",
            sa.String(length=20),
            nullable=False,
            comment="active | suspended | graduated | expelled",
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("account_id"),
        sa.UniqueConstraint("student_number"),
    )

    op.create_table(
        "consent_grants",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("student_profile_id", sa.Uuid(), nullable=False),
        sa.Column("guardian_email", sa.String(length=255), nullable=False),
        sa.Column("guardian_name", sa.String(length=255), nullable=False),
        sa.Column(
            "guardian_account_id",
            sa.Uuid(),
            nullable=True,
            comment="Parent account linked to the grant (drives parent row scoping)",
        ),
        sa.Column(
            "kind",
            sa.String(length=30),
            nullable=False,
            comment="general | grades_view | data_export | external_links",
        ),
        sa.Column(
            "consent_token",
            sa.String(length=64),
            nullable=False,
            comment="Opaque token for the guardian confirmation flow",
        ),
        sa.Column("granted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ip_address", sa.String(length=45), nullable=True),
        sa.Column("user_agent", sa.String(length=500), nullable=True),
        *_timestamps(mutable=False),
        sa.ForeignKeyConstraint(
            ["student_profile_id"], ["student_profiles.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["guardian_account_id"], ["accounts.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("consent_token"),
    )
    op.create_index(
        op.f("ix_consent_grants_student_profile_id"),
        "consent_grants",
        ["student_profile_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_consent_grants_guardian_account_id"),
        "consent_grants",
        ["guardian_account_id"],
        unique=False,
    )

    op.create_table(
        "access_tokens",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("account_id", sa.Uuid(), nullable=False),
        sa.Column(
            "token_hash",
            sa.String(length=64),
            nullable=False,
            comment="Hex SHA-256 digest of the raw token",
        ),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(mutable=False),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_access_tokens_account_id"), "access_tokens", ["account_id"], unique=False
    )
    op.create_index(
        op.f("ix_access_tokens_token_hash"), "access_tokens", ["token_hash"], unique=True
    )

    # School records scoped by row-level security
    op.create_table(
        "courses",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("teacher_id", sa.Uuid(), nullable=False),
        _deleted_at(),
        *_timestamps(),
        sa.ForeignKeyConstraint(["teacher_id"], ["accounts.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_courses_teacher_id"), "courses", ["teacher_id"], unique=False)

    op.create_table(
        "assignments",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("student_id", sa.Uuid(), nullable=False),
        sa.Column("teacher_id", sa.Uuid(), nullable=False),
        sa.Column("course_id", sa.Uuid(), nullable=True),
        _deleted_at(),
        *_timestamps(),
        sa.ForeignKeyConstraint(["student_id"], ["accounts.id"]),
        sa.ForeignKeyConstraint(["teacher_id"], ["accounts.id"]),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_assignments_student_id"), "assignments", ["student_id"], unique=False
    )
    op.create_index(
        op.f("ix_assignments_teacher_id"), "assignments", ["teacher_id"], unique=False
    )

    op.create_table(
        "grades",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("student_id", sa.Uuid(), nullable=False),
        sa.Column("teacher_id", sa.Uuid(), nullable=False),
        sa.Column("assignment_id", sa.Uuid(), nullable=True),
        sa.Column("score", sa.Numeric(precision=5, scale=2), nullable=True),
        _deleted_at(),
        *_timestamps(),
        sa.ForeignKeyConstraint(["student_id"], ["accounts.id"]),
        sa.ForeignKeyConstraint(["teacher_id"], ["accounts.id"]),
        sa.ForeignKeyConstraint(["assignment_id"], ["assignments.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_grades_student_id"), "grades", ["student_id"], unique=False)
    op.create_index(op.f("ix_grades_teacher_id"), "grades", ["teacher_id"], unique=False)

    op.create_table(
        "submissions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("student_id", sa.Uuid(), nullable=False),
        sa.Column("assignment_id", sa.Uuid(), nullable=False),
        sa.Column("body", sa.Text(), nullable=True),
        _deleted_at(),
        *_timestamps(),
        sa.ForeignKeyConstraint(["student_id"], ["accounts.id"]),
        sa.ForeignKeyConstraint(["assignment_id"], ["assignments.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_submissions_student_id"), "submissions", ["student_id"], unique=False
    )
    op.create_index(
        op.f("ix_submissions_assignment_id"),
        "submissions",
        ["assignment_id"],
        unique=False,
    )

    op.create_table(
        "announcements",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("author_id", sa.Uuid(), nullable=False),
        _deleted_at(),
        *_timestamps(),
        sa.ForeignKeyConstraint(["author_id"], ["accounts.id"]),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "notifications",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        _deleted_at(),
        *_timestamps(),
        sa.ForeignKeyConstraint(["owner_id"], ["accounts.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_notifications_owner_id"), "notifications", ["owner_id"], unique=False
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f("ix_notifications_owner_id"), table_name="notifications")
    op.drop_table("notifications")
    op.drop_table("announcements")
    op.drop_index(op.f("ix_submissions_assignment_id"), table_name="submissions")
    op.drop_index(op.f("ix_submissions_student_id"), table_name="submissions")
    op.drop_table("submissions")
    op.drop_index(op.f("ix_grades_teacher_id"), table_name="grades")
    op.drop_index(op.f("ix_grades_student_id"), table_name="grades")
    op.drop_table("grades")
    op.drop_index(op.f("ix_assignments_teacher_id"), table_name="assignments")
    op.drop_index(op.f("ix_assignments_student_id"), table_name="assignments")
    op.drop_table("assignments")
    op.drop_index(op.f("ix_courses_teacher_id"), table_name="courses")
    op.drop_table("courses")
    op.drop_index(op.f("ix_access_tokens_token_hash"), table_name="access_tokens")
    op.drop_index(op.f("ix_access_tokens_account_id"), table_name="access_tokens")
    op.drop_table("access_tokens")
    op.drop_index(
        op.f("ix_consent_grants_guardian_account_id"), table_name="consent_grants"
    )
    op.drop_index(
        op.f("ix_consent_grants_student_profile_id"), table_name="consent_grants"
    )
    op.drop_table("consent_grants")
    op.drop_table("student_profiles")
    op.drop_index(op.f("ix_accounts_role"), table_name="accounts")
    op.drop_index(op.f("ix_accounts_email"), table_name="accounts")
    op.drop_table("accounts")
