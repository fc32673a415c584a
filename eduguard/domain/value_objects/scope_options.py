"""Options for row-scoped queries."""

from dataclasses import dataclass

from eduguard.domain.entities import Account


@dataclass(frozen=True, slots=True, kw_only=True)
class ScopeOptions:
    """Options for a scoped query.

    Attributes:
        include_trashed: Return soft-deleted rows too (admin override only).
        override_account: Scope as this account instead of the caller.
            Honoured only when the caller is an admin.
    """

    include_trashed: bool = False
    override_account: Account | None = None


DEFAULT_SCOPE = ScopeOptions()
