"""Gate dependencies for protected routes.

Compose them in route signatures; each one authenticates through
get_current_account and raises a GateDenied problem on denial:

    @router.get("/grades", dependencies=[Depends(require_consent())])
    async def list_grades(
        account: Annotated[Account, Depends(require_roles("teacher", "admin"))],
        access: AccessControl,
        session: Annotated[AsyncSession, Depends(get_db_session)],
    ):
        stmt = await access.scope_query(select(GradeModel), account)
        return (await session.execute(stmt)).scalars().all()
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends

from eduguard.application.services import AccessControlService
from eduguard.core.container import get_access_control_service
from eduguard.domain.entities import Account
from eduguard.domain.enums import AccountRole
from eduguard.presentation.dependencies.auth_dependencies import get_current_account
from eduguard.presentation.errors import ErrorResponseBuilder

AccessControl = Annotated[AccessControlService, Depends(get_access_control_service)]


def require_consent() -> Callable[..., Awaitable[Account]]:
    """Dependency factory: caller must pass the consent gate.

    Returns:
        Dependency resolving to the caller's Account.

    Raises (from the dependency):
        GateDenied 403 GDPR_CONSENT_REQUIRED: Guardian or data processing
            consent missing.
        ProfileMissingError: Student without a profile (rendered as 500).
    """

    async def consent_checker(
        account: Annotated[Account, Depends(get_current_account)],
        access: AccessControl,
    ) -> Account:
        decision = await access.authorize_consent(account)
        if decision.denied:
            raise ErrorResponseBuilder.exception_for_decision(decision)
        return account

    return consent_checker


def require_roles(*roles: AccountRole | str) -> Callable[..., Awaitable[Account]]:
    """Dependency factory: caller's role must be one of ``roles``.

    No roles means any authenticated caller.

    Raises (from the dependency):
        GateDenied 403 AUTHORIZATION_FAILED: Role not allowed.
    """
    allowed = tuple(AccountRole(role) for role in roles)

    async def role_checker(
        account: Annotated[Account, Depends(get_current_account)],
        access: AccessControl,
    ) -> Account:
        decision = await access.authorize_role(account, allowed)
        if decision.denied:
            raise ErrorResponseBuilder.exception_for_decision(decision)
        return account

    return role_checker
