"""Access-control facade.

Single entry point the request pipeline talks to:

    authenticate        credential and lockout state machine (login)
    authorize_consent   consent gate
    authorize_role      role gate
    scope_query         row-level security
    evaluate_password   password policy
    password_strength   strength score and feedback

The gates stay pure decision functions; this service is where their
denials become audit events.

Usage:
    service = AccessControlService(...)
    decision = await service.authorize_consent(account)
    if decision.denied:
        ...
"""

from collections.abc import Iterable
from typing import Any
from uuid import UUID

from eduguard.application.commands.auth_commands import AuthenticateAccount
from eduguard.application.commands.handlers.authenticate_account_handler import (
    AuthenticateAccountHandler,
    AuthenticationFailure,
)
from eduguard.application.services.consent_gate import ConsentGate
from eduguard.application.services.role_gate import RoleGate
from eduguard.core.result import Result
from eduguard.domain.entities import Account
from eduguard.domain.enums import AccountRole, EntityKind
from eduguard.domain.errors import AccessDenied
from eduguard.domain.events import (
    ConsentDenied,
    RecordAccessDenied,
    RoleDenied,
    RowScopeOverrideUsed,
)
from eduguard.domain.policies import PasswordPolicy, PasswordStrength, PasswordVerdict
from eduguard.domain.protocols import ClockProtocol, EventBusProtocol, RowScopingProtocol
from eduguard.domain.value_objects import DEFAULT_SCOPE, AuthorizationDecision, ScopeOptions


class AccessControlService:
    """Facade over the four gates and the password policy.

    Args:
        authenticate_handler: Credential and lockout state machine.
        consent_gate: Consent gate.
        role_gate: Role gate.
        row_scoping: Row-level security engine.
        event_bus: Event bus for denial and override events.
        clock: Time source for event timestamps.
        password_policy: Password rules.
    """

    def __init__(
        self,
        authenticate_handler: AuthenticateAccountHandler,
        consent_gate: ConsentGate,
        role_gate: RoleGate,
        row_scoping: RowScopingProtocol,
        event_bus: EventBusProtocol,
        clock: ClockProtocol,
        password_policy: PasswordPolicy | None = None,
    ) -> None:
        self._authenticate_handler = authenticate_handler
        self._consent_gate = consent_gate
        self._role_gate = role_gate
        self._row_scoping = row_scoping
        self._event_bus = event_bus
        self._clock = clock
        self._password_policy = password_policy or PasswordPolicy()

    async def authenticate(
        self,
        email: str,
        password: str,
        metadata: dict[str, str] | None = None,
    ) -> Result[Account, AuthenticationFailure]:
        """Run the credential and lockout state machine."""
        return await self._authenticate_handler.handle(
            AuthenticateAccount(email=email, password=password),
            metadata=metadata,
        )

    async def authorize_consent(self, account: Account) -> AuthorizationDecision:
        """Check consent; publish ConsentDenied on denial.

        Raises:
            ProfileMissingError: Student account without a profile.
        """
        decision = await self._consent_gate.check(account)
        if decision.denied:
            assert decision.kind is not None and decision.reason is not None
            await self._event_bus.publish(
                ConsentDenied(
                    occurred_at=self._clock.now(),
                    account_id=account.id,
                    kind=decision.kind.value,
                    reason=decision.reason,
                )
            )
        return decision

    async def authorize_role(
        self, account: Account, allowed_roles: Iterable[AccountRole | str]
    ) -> AuthorizationDecision:
        """Check the caller's role; publish RoleDenied on denial."""
        decision = self._role_gate.check(account, allowed_roles)
        if decision.denied:
            await self._event_bus.publish(
                RoleDenied(
                    occurred_at=self._clock.now(),
                    account_id=account.id,
                    role=account.role,
                    allowed_roles=tuple(decision.metadata["allowed_roles"]),
                )
            )
        return decision

    async def scope_query(
        self,
        stmt: Any,
        account: Account,
        options: ScopeOptions = DEFAULT_SCOPE,
    ) -> Any:
        """Narrow ``stmt`` to the caller's rows; audit admin overrides."""
        scoped = self._row_scoping.scope(stmt, account, options)
        if (
            account.account_role is AccountRole.ADMIN
            and options.override_account is not None
        ):
            entity = stmt.column_descriptions[0]["entity"].__entity_kind__
            await self._event_bus.publish(
                RowScopeOverrideUsed(
                    occurred_at=self._clock.now(),
                    admin_account_id=account.id,
                    override_account_id=options.override_account.id,
                    entity=EntityKind(entity).value,
                    include_trashed=options.include_trashed,
                )
            )
        return scoped

    async def can_access(
        self, session: Any, account: Account, model: Any, record_id: UUID
    ) -> bool:
        """True if ``record_id`` of ``model`` is visible to the caller."""
        return await self._row_scoping.can_access(session, account, model, record_id)

    async def scope_or_fail(
        self,
        session: Any,
        stmt: Any,
        account: Account,
        options: ScopeOptions = DEFAULT_SCOPE,
    ) -> list[Any]:
        """Execute the scoped statement; publish RecordAccessDenied when empty.

        Raises:
            AccessDenied: If nothing visible matches.
        """
        try:
            return await self._row_scoping.scope_or_fail(session, stmt, account, options)
        except AccessDenied as exc:
            await self._event_bus.publish(
                RecordAccessDenied(
                    occurred_at=self._clock.now(),
                    account_id=account.id,
                    entity=exc.entity.value,
                )
            )
            raise

    def evaluate_password(self, candidate: str) -> PasswordVerdict:
        """Accepted, or Rejected with the first failing rule."""
        return self._password_policy.evaluate(candidate)

    def password_strength(self, candidate: str) -> PasswordStrength:
        """Score (0..4) and feedback; never rejects."""
        return self._password_policy.score(candidate)
