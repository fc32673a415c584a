"""Fixtures for integration tests: a small school seeded into SQLite."""

from dataclasses import dataclass
from datetime import timedelta
from uuid import UUID

import pytest_asyncio
from uuid_extensions import uuid7

from eduguard.domain.entities import Account
from eduguard.infrastructure.persistence.models import (
    AnnouncementModel,
    AssignmentModel,
    CourseModel,
    GradeModel,
    NotificationModel,
    SubmissionModel,
)
from eduguard.infrastructure.persistence.repositories import (
    AccountRepository,
    ConsentGrantRepository,
    StudentProfileRepository,
)
from tests.conftest import NOW, create_account, create_grant, create_profile


RECORD_NAMES = (
    "assignment_1",
    "assignment_2",
    "grade_1",
    "grade_2",
    "grade_trashed",
    "submission_1",
    "submission_2",
    "announcement",
    "course",
    "notification_a",
    "notification_b",
)


def stamped(model):
    """Give a record model explicit timestamps so nothing is fetched lazily."""
    model.created_at = NOW
    model.updated_at = NOW
    return model


@dataclass
class School:
    """Seeded accounts and record ids."""

    student_a: Account
    student_b: Account
    teacher_t: Account
    teacher_u: Account
    parent_p: Account
    admin: Account
    stranger: Account
    departed: Account
    profile_a_id: UUID
    grant_id: UUID
    assignment_1: UUID
    assignment_2: UUID
    grade_1: UUID
    grade_2: UUID
    grade_trashed: UUID
    submission_1: UUID
    submission_2: UUID
    announcement: UUID
    course: UUID
    notification_a: UUID
    notification_b: UUID


@pytest_asyncio.fixture
async def school(session) -> School:
    """Two students, two teachers, one parent linked to student A, an admin,
    an account with an unrecognised role and a soft-deleted student.
    """
    student_a = create_account(role="student", allow_search=False)
    student_b = create_account(role="student", allow_search=True)
    teacher_t = create_account(role="teacher")
    teacher_u = create_account(role="teacher")
    parent_p = create_account(role="parent")
    admin = create_account(role="admin")
    stranger = create_account(role="janitor")
    departed = create_account(
        role="student", allow_search=True, deleted_at=NOW - timedelta(days=1)
    )

    accounts = AccountRepository(session)
    for account in (
        student_a,
        student_b,
        teacher_t,
        teacher_u,
        parent_p,
        admin,
        stranger,
        departed,
    ):
        await accounts.save(account)

    profiles = StudentProfileRepository(session)
    profile_a = create_profile(student_a.id)
    profile_b = create_profile(student_b.id)
    await profiles.save(profile_a)
    await profiles.save(profile_b)

    grant = create_grant(profile_a.id, guardian_account_id=parent_p.id)
    await ConsentGrantRepository(session).save(grant)

    ids = {name: uuid7() for name in RECORD_NAMES}
    session.add_all(
        [
            stamped(CourseModel(id=ids["course"], name="Maths", teacher_id=teacher_t.id)),
            stamped(
                AssignmentModel(
                    id=ids["assignment_1"],
                    title="Algebra",
                    student_id=student_a.id,
                    teacher_id=teacher_t.id,
                )
            ),
            stamped(
                AssignmentModel(
                    id=ids["assignment_2"],
                    title="Poetry",
                    student_id=student_b.id,
                    teacher_id=teacher_u.id,
                )
            ),
        ]
    )
    await session.commit()
    session.add_all(
        [
            stamped(
                GradeModel(
                    id=ids["grade_1"],
                    student_id=student_a.id,
                    teacher_id=teacher_t.id,
                    assignment_id=ids["assignment_1"],
                )
            ),
            stamped(
                GradeModel(
                    id=ids["grade_2"],
                    student_id=student_b.id,
                    teacher_id=teacher_u.id,
                    assignment_id=ids["assignment_2"],
                )
            ),
            stamped(
                GradeModel(
                    id=ids["grade_trashed"],
                    student_id=student_a.id,
                    teacher_id=teacher_t.id,
                    deleted_at=NOW - timedelta(hours=1),
                )
            ),
            stamped(
                SubmissionModel(
                    id=ids["submission_1"],
                    student_id=student_a.id,
                    assignment_id=ids["assignment_1"],
                )
            ),
            stamped(
                SubmissionModel(
                    id=ids["submission_2"],
                    student_id=student_b.id,
                    assignment_id=ids["assignment_2"],
                )
            ),
            stamped(
                AnnouncementModel(
                    id=ids["announcement"], title="Sports day", author_id=admin.id
                )
            ),
            stamped(
                NotificationModel(
                    id=ids["notification_a"], owner_id=student_a.id, message="Hi A"
                )
            ),
            stamped(
                NotificationModel(
                    id=ids["notification_b"], owner_id=student_b.id, message="Hi B"
                )
            ),
        ]
    )
    await session.commit()

    return School(
        student_a=student_a,
        student_b=student_b,
        teacher_t=teacher_t,
        teacher_u=teacher_u,
        parent_p=parent_p,
        admin=admin,
        stranger=stranger,
        departed=departed,
        profile_a_id=profile_a.id,
        grant_id=grant.id,
        **ids,
    )
