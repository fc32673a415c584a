"""Handler and service dependency factories (request-scoped).

Each factory builds repositories on the request's session and wires them
with the application-scoped singletons.
"""

from datetime import timedelta
from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eduguard.core.config import settings
from eduguard.core.container.events import get_event_bus
from eduguard.core.container.infrastructure import (
    get_clock,
    get_db_session,
    get_password_service,
    get_row_security,
)

if TYPE_CHECKING:
    from eduguard.application.commands.handlers import (
        AuthenticateAccountHandler,
        GrantGuardianConsentHandler,
        IssueAccessTokenHandler,
        RegisterAccountHandler,
        RevokeGuardianConsentHandler,
    )
    from eduguard.application.services import AccessControlService


async def get_authenticate_account_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "AuthenticateAccountHandler":
    """Get AuthenticateAccount command handler (request-scoped).

    Lockout limits come from settings (lockout_max_attempts,
    lockout_duration_minutes).
    """
    from eduguard.application.commands.handlers import AuthenticateAccountHandler
    from eduguard.infrastructure.persistence.repositories import AccountRepository

    return AuthenticateAccountHandler(
        account_repo=AccountRepository(session=session),
        password_service=get_password_service(),
        event_bus=get_event_bus(),
        clock=get_clock(),
        max_attempts=settings.lockout_max_attempts,
        lockout_duration=timedelta(minutes=settings.lockout_duration_minutes),
    )


async def get_issue_access_token_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "IssueAccessTokenHandler":
    """Get IssueAccessToken command handler (request-scoped).

    Token lifetime comes from settings.access_token_expire_minutes.
    """
    from eduguard.application.commands.handlers import IssueAccessTokenHandler
    from eduguard.infrastructure.persistence.repositories import AccessTokenRepository
    from eduguard.infrastructure.security.token_digest import OpaqueTokenService

    return IssueAccessTokenHandler(
        token_repo=AccessTokenRepository(session=session),
        token_service=OpaqueTokenService(),
        clock=get_clock(),
        lifetime=timedelta(minutes=settings.access_token_expire_minutes),
    )


async def get_register_account_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RegisterAccountHandler":
    """Get RegisterAccount command handler (request-scoped)."""
    from eduguard.application.commands.handlers import RegisterAccountHandler
    from eduguard.infrastructure.persistence.repositories import (
        AccountRepository,
        StudentProfileRepository,
    )

    return RegisterAccountHandler(
        account_repo=AccountRepository(session=session),
        profile_repo=StudentProfileRepository(session=session),
        password_service=get_password_service(),
        event_bus=get_event_bus(),
        clock=get_clock(),
    )


async def get_grant_guardian_consent_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "GrantGuardianConsentHandler":
    """Get GrantGuardianConsent command handler (request-scoped)."""
    from eduguard.application.commands.handlers import GrantGuardianConsentHandler
    from eduguard.infrastructure.persistence.repositories import (
        ConsentGrantRepository,
        StudentProfileRepository,
    )

    return GrantGuardianConsentHandler(
        profile_repo=StudentProfileRepository(session=session),
        grant_repo=ConsentGrantRepository(session=session),
        event_bus=get_event_bus(),
        clock=get_clock(),
        default_ttl=timedelta(days=settings.consent_grant_ttl_days),
    )


async def get_revoke_guardian_consent_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RevokeGuardianConsentHandler":
    """Get RevokeGuardianConsent command handler (request-scoped)."""
    from eduguard.application.commands.handlers import RevokeGuardianConsentHandler
    from eduguard.infrastructure.persistence.repositories import ConsentGrantRepository

    return RevokeGuardianConsentHandler(
        grant_repo=ConsentGrantRepository(session=session),
        event_bus=get_event_bus(),
        clock=get_clock(),
    )


async def get_access_control_service(
    session: AsyncSession = Depends(get_db_session),
) -> "AccessControlService":
    """Get the access-control facade (request-scoped).

    Usage:
        @router.get("/grades")
        async def list_grades(
            access: AccessControlService = Depends(get_access_control_service),
        ):
            stmt = await access.scope_query(select(GradeModel), account)
    """
    from eduguard.application.services import (
        AccessControlService,
        ConsentGate,
        RoleGate,
    )
    from eduguard.domain.policies import GuardianConsentPolicy
    from eduguard.infrastructure.persistence.repositories import (
        StudentProfileRepository,
    )

    clock = get_clock()
    event_bus = get_event_bus()

    return AccessControlService(
        authenticate_handler=await get_authenticate_account_handler(session),
        consent_gate=ConsentGate(
            profile_repo=StudentProfileRepository(session=session),
            clock=clock,
            guardian_policy=GuardianConsentPolicy(settings.guardian_consent_age),
        ),
        role_gate=RoleGate(),
        row_scoping=get_row_security(),
        event_bus=event_bus,
        clock=clock,
    )
