"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Database (PostgreSQL / SQLite)
- Password hashing (bcrypt)
- Clock
- Logging (console, JSON outside development)
- Row-level security engine

Request-scoped:
- Database session
"""

from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from eduguard.core.config import settings
from eduguard.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from eduguard.domain.protocols import (
        ClockProtocol,
        LoggerProtocol,
        PasswordHashingProtocol,
        RowScopingProtocol,
    )


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Use get_db_session() for per-request sessions.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)
    """
    from eduguard.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get password hashing service singleton (app-scoped).

    Cost factor comes from settings.bcrypt_rounds (12 by default, ~250ms).
    """
    from eduguard.infrastructure.security.bcrypt_password_service import (
        BcryptPasswordService,
    )

    return BcryptPasswordService(cost_factor=settings.bcrypt_rounds)


@lru_cache()
def get_clock() -> "ClockProtocol":
    """Get the wall clock (app-scoped)."""
    from eduguard.infrastructure.clock.system_clock import SystemClock

    return SystemClock()


@lru_cache()
def get_row_security() -> "RowScopingProtocol":
    """Get the row-level security engine (app-scoped, stateless)."""
    from eduguard.infrastructure.authorization.row_level_security import (
        RowLevelSecurity,
    )

    return RowLevelSecurity(clock=get_clock())


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Creates new session per request with automatic transaction management:
        - Commits on success
        - Rolls back on exception
        - Always closes session

    Usage:
        @router.get("/grades")
        async def list_grades(
            session: AsyncSession = Depends(get_db_session),
        ):
            ...
    """
    db = get_database()
    async with db.get_session() as session:
        yield session
