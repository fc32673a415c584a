"""FastAPI dependencies for authentication and the access-control gates."""

from eduguard.presentation.dependencies.auth_dependencies import (
    CurrentAccount,
    bearer_scheme,
    get_current_account,
)
from eduguard.presentation.dependencies.authorization_dependencies import (
    AccessControl,
    require_consent,
    require_roles,
)

__all__ = [
    "AccessControl",
    "CurrentAccount",
    "bearer_scheme",
    "get_current_account",
    "require_consent",
    "require_roles",
]
