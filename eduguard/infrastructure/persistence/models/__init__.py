"""Database models.

Importing this package registers every table on BaseModel.metadata.
"""

from eduguard.infrastructure.persistence.models.access_token import AccessTokenModel
from eduguard.infrastructure.persistence.models.account import AccountModel
from eduguard.infrastructure.persistence.models.records import (
    AnnouncementModel,
    AssignmentModel,
    CourseModel,
    GradeModel,
    NotificationModel,
    SubmissionModel,
)
from eduguard.infrastructure.persistence.models.student_profile import (
    ConsentGrantModel,
    StudentProfileModel,
)

__all__ = [
    "AccessTokenModel",
    "AccountModel",
    "AnnouncementModel",
    "AssignmentModel",
    "ConsentGrantModel",
    "CourseModel",
    "GradeModel",
    "NotificationModel",
    "StudentProfileModel",
    "SubmissionModel",
]
