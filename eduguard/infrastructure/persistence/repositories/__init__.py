"""Repository adapters (SQLAlchemy implementations of domain ports)."""

from eduguard.infrastructure.persistence.repositories.access_token_repository import (
    AccessTokenRepository,
)
from eduguard.infrastructure.persistence.repositories.account_repository import (
    AccountRepository,
)
from eduguard.infrastructure.persistence.repositories.student_profile_repository import (
    ConsentGrantRepository,
    StudentProfileRepository,
)

__all__ = [
    "AccessTokenRepository",
    "AccountRepository",
    "ConsentGrantRepository",
    "StudentProfileRepository",
]
