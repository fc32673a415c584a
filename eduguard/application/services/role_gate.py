"""Role authorization gate (stateless)."""

from collections.abc import Iterable

from eduguard.domain.entities import Account
from eduguard.domain.enums import AccountRole, DenialKind, Gate
from eduguard.domain.value_objects import AuthorizationDecision


def role_denial_message(allowed_roles: Iterable[str]) -> str:
    return f"This action requires one of the following roles: {', '.join(allowed_roles)}"


class RoleGate:
    """Allow iff the caller's stored role is in the endpoint's allowed set.

    An empty set allows every caller. An unrecognised stored role never
    matches a non-empty set.
    """

    def check(
        self, account: Account, allowed_roles: Iterable[AccountRole | str]
    ) -> AuthorizationDecision:
        roles = [AccountRole(role).value for role in allowed_roles]
        if not roles or account.role in roles:
            return AuthorizationDecision.allow(Gate.ROLE)
        return AuthorizationDecision.deny(
            Gate.ROLE,
            DenialKind.ROLE_NOT_ALLOWED,
            role_denial_message(roles),
            allowed_roles=roles,
        )
