"""Container module - Centralized dependency injection.

Re-exports all factory functions from submodules:

    from eduguard.core.container import get_event_bus, get_access_control_service

The container is organized into modules:
- infrastructure: Core services (db, hashing, clock, logging, row security)
- events: Event bus and subscriptions
- handlers: Command handler and access-control service factories
"""

# Infrastructure services
from eduguard.core.container.infrastructure import (
    get_clock,
    get_database,
    get_db_session,
    get_logger,
    get_password_service,
    get_row_security,
)

# Event bus
from eduguard.core.container.events import get_event_bus

# Handlers and services
from eduguard.core.container.handlers import (
    get_access_control_service,
    get_authenticate_account_handler,
    get_grant_guardian_consent_handler,
    get_issue_access_token_handler,
    get_register_account_handler,
    get_revoke_guardian_consent_handler,
)

__all__ = [
    # Infrastructure
    "get_clock",
    "get_database",
    "get_db_session",
    "get_logger",
    "get_password_service",
    "get_row_security",
    # Events
    "get_event_bus",
    # Handlers
    "get_access_control_service",
    "get_authenticate_account_handler",
    "get_grant_guardian_consent_handler",
    "get_issue_access_token_handler",
    "get_register_account_handler",
    "get_revoke_guardian_consent_handler",
]
