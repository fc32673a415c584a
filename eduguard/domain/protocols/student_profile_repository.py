"""Student profile and consent grant repository protocols.

Port (interface) for hexagonal architecture.
"""

from typing import Protocol
from uuid import UUID

from eduguard.domain.entities.consent_grant import ConsentGrant
from eduguard.domain.entities.student_profile import StudentProfile


class StudentProfileRepository(Protocol):
    """Student profile repository protocol (port)."""

    async def find_by_account_id(self, account_id: UUID) -> StudentProfile | None:
        """Load the profile of a student account with all its consent grants.

        Returns:
            The profile with ``grants`` populated, or None if the account has
            no profile.
        """
        ...

    async def exists_by_student_number(self, student_number: str) -> bool:
        """True if a profile already uses ``student_number``."""
        ...

    async def save(self, profile: StudentProfile) -> None:
        """Create new profile and commit."""
        ...


class ConsentGrantRepository(Protocol):
    """Guardian consent grant repository protocol (port)."""

    async def find_by_id(self, grant_id: UUID) -> ConsentGrant | None:
        """Find grant by ID."""
        ...

    async def find_by_token(self, consent_token: str) -> ConsentGrant | None:
        """Find grant by its consent token."""
        ...

    async def save(self, grant: ConsentGrant) -> None:
        """Create new grant and commit."""
        ...

    async def update(self, grant: ConsentGrant) -> None:
        """Persist changed grant fields and commit."""
        ...
