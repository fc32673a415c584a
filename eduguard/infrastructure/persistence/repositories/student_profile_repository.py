"""Student profile and consent grant repositories (SQLAlchemy).

Profiles are loaded with their grants in one round-trip (selectin); the
consent gate then evaluates grant activity in memory against the clock.
"""

from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from eduguard.domain.entities.consent_grant import ConsentGrant
from eduguard.domain.entities.student_profile import StudentProfile
from eduguard.domain.enums import AcademicStatus, ConsentKind
from eduguard.infrastructure.persistence.models.student_profile import (
    ConsentGrantModel,
    StudentProfileModel,
)


def profile_to_model(profile: StudentProfile) -> StudentProfileModel:
    return StudentProfileModel(
        id=profile.id,
        account_id=profile.account_id,
        birth_date=profile.birth_date,
        student_number=profile.student_number,
        grade_level=profile.grade_level,
        academic_status=profile.academic_status.value,
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


def grant_to_domain(model: ConsentGrantModel) -> ConsentGrant:
    return ConsentGrant(
        id=model.id,
        student_profile_id=model.student_profile_id,
        guardian_email=model.guardian_email,
        guardian_name=model.guardian_name,
        guardian_account_id=model.guardian_account_id,
        kind=ConsentKind(model.kind),
        consent_token=model.consent_token,
        granted_at=model.granted_at,
        expires_at=model.expires_at,
        revoked_at=model.revoked_at,
        ip_address=model.ip_address,
        user_agent=model.user_agent,
        created_at=model.created_at,
    )


class StudentProfileRepository:
    """SQLAlchemy implementation of the StudentProfileRepository protocol."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_account_id(self, account_id: UUID) -> StudentProfile | None:
        # Refresh identity-mapped profiles so grants written earlier in the
        # session are visible
        stmt = (
            select(StudentProfileModel)
            .where(StudentProfileModel.account_id == account_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return self._to_domain(model)

    async def exists_by_student_number(self, student_number: str) -> bool:
        stmt = select(
            exists().where(StudentProfileModel.student_number == student_number)
        )
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    async def save(self, profile: StudentProfile) -> None:
        self.session.add(profile_to_model(profile))
        await self.session.commit()

    @staticmethod
    def _to_domain(model: StudentProfileModel) -> StudentProfile:
        return StudentProfile(
            id=model.id,
            account_id=model.account_id,
            birth_date=model.birth_date,
            student_number=model.student_number,
            grade_level=model.grade_level,
            academic_status=AcademicStatus(model.academic_status),
            created_at=model.created_at,
            updated_at=model.updated_at,
            grants=[grant_to_domain(grant) for grant in model.grants],
        )


class ConsentGrantRepository:
    """SQLAlchemy implementation of the ConsentGrantRepository protocol."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, grant_id: UUID) -> ConsentGrant | None:
        model = await self.session.get(ConsentGrantModel, grant_id)
        return grant_to_domain(model) if model is not None else None

    async def find_by_token(self, consent_token: str) -> ConsentGrant | None:
        stmt = select(ConsentGrantModel).where(
            ConsentGrantModel.consent_token == consent_token
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return grant_to_domain(model) if model is not None else None

    async def save(self, grant: ConsentGrant) -> None:
        model = ConsentGrantModel(
            id=grant.id,
            student_profile_id=grant.student_profile_id,
            guardian_email=grant.guardian_email,
            guardian_name=grant.guardian_name,
            guardian_account_id=grant.guardian_account_id,
            kind=grant.kind.value,
            consent_token=grant.consent_token,
            granted_at=grant.granted_at,
            expires_at=grant.expires_at,
            revoked_at=grant.revoked_at,
            ip_address=grant.ip_address,
            user_agent=grant.user_agent,
            created_at=grant.created_at,
        )
        self.session.add(model)
        await self.session.commit()

    async def update(self, grant: ConsentGrant) -> None:
        stmt = select(ConsentGrantModel).where(ConsentGrantModel.id == grant.id)
        result = await self.session.execute(stmt)
        model = result.scalar_one()

        model.guardian_account_id = grant.guardian_account_id
        model.granted_at = grant.granted_at
        model.expires_at = grant.expires_at
        model.revoked_at = grant.revoked_at
        model.ip_address = grant.ip_address
        model.user_agent = grant.user_agent

        await self.session.commit()
