"""AccountRepository protocol for account persistence.

Port (interface) for hexagonal architecture.
Infrastructure layer implements this protocol.
"""

from typing import Protocol
from uuid import UUID

from eduguard.domain.entities.account import Account
from eduguard.domain.entities.student_profile import StudentProfile


class AccountRepository(Protocol):
    """Account repository protocol (port).

    Soft-deleted accounts are invisible to every finder: a deleted account
    authenticates exactly like an unknown email.

    Methods:
        find_by_id: Retrieve account by ID
        find_by_email: Retrieve account by email (case-insensitive)
        find_by_email_for_update: Same, holding a row lock until commit
        exists_by_email / exists_by_handle: Uniqueness checks
        save: Create new account, optionally with its student profile
        update: Persist changed fields and commit
    """

    async def find_by_id(self, account_id: UUID) -> Account | None:
        """Find account by ID."""
        ...

    async def find_by_email(self, email: str) -> Account | None:
        """Find account by email address (case-insensitive)."""
        ...

    async def find_by_email_for_update(self, email: str) -> Account | None:
        """Find account by email and lock its row (SELECT ... FOR UPDATE).

        Concurrent authentication attempts against the same account are
        serialised on this lock; it is released when update() commits or
        the session ends.
        """
        ...

    async def exists_by_email(self, email: str) -> bool:
        """True if a live account uses ``email`` (case-insensitive)."""
        ...

    async def exists_by_handle(self, handle: str) -> bool:
        """True if a live account uses ``handle``."""
        ...

    async def save(
        self, account: Account, profile: StudentProfile | None = None
    ) -> None:
        """Create new account (and its student profile) in a single commit.

        Either both rows are persisted or neither is.
        """
        ...

    async def update(self, account: Account) -> None:
        """Persist changed account fields and commit."""
        ...
