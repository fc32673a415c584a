"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols without inheritance.

Usage:
    from eduguard.domain.protocols import AccountRepository, ClockProtocol
"""

# Service protocols
from eduguard.domain.protocols.clock_protocol import ClockProtocol
from eduguard.domain.protocols.event_bus_protocol import EventBusProtocol, EventHandler
from eduguard.domain.protocols.logger_protocol import LoggerProtocol
from eduguard.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from eduguard.domain.protocols.row_scoping_protocol import RowScopingProtocol
from eduguard.domain.protocols.token_generation_protocol import TokenGenerationProtocol

# Repository protocols
from eduguard.domain.protocols.access_token_repository import AccessTokenRepository
from eduguard.domain.protocols.account_repository import AccountRepository
from eduguard.domain.protocols.student_profile_repository import (
    ConsentGrantRepository,
    StudentProfileRepository,
)

__all__ = [
    # Services
    "ClockProtocol",
    "EventBusProtocol",
    "EventHandler",
    "LoggerProtocol",
    "PasswordHashingProtocol",
    "RowScopingProtocol",
    "TokenGenerationProtocol",
    # Repositories
    "AccessTokenRepository",
    "AccountRepository",
    "ConsentGrantRepository",
    "StudentProfileRepository",
]
