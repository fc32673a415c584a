"""Row scoping protocol.

The application layer narrows queries through this port; the SQLAlchemy
row-level security engine implements it.
"""

from typing import Any, Protocol
from uuid import UUID

from eduguard.domain.entities import Account
from eduguard.domain.value_objects import ScopeOptions


class RowScopingProtocol(Protocol):
    """Query narrowing per caller.

    Statements, sessions and models are opaque to the domain.
    """

    def scope(self, stmt: Any, account: Account, options: ScopeOptions = ...) -> Any:
        """Return ``stmt`` restricted to the rows ``account`` may see (no I/O)."""
        ...

    async def can_access(
        self, session: Any, account: Account, model: Any, record_id: UUID
    ) -> bool:
        """True if the record exists and is visible to ``account``."""
        ...

    async def scope_or_fail(
        self, session: Any, stmt: Any, account: Account, options: ScopeOptions = ...
    ) -> list[Any]:
        """Execute the scoped statement; raise AccessDenied when it is empty."""
        ...
