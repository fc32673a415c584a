"""Domain errors package.

Usage:
    from eduguard.domain.errors import InvalidCredentials, AccessDenied
"""

from eduguard.domain.errors.access_errors import AccessDenied, ProfileMissingError
from eduguard.domain.errors.authentication_errors import (
    AccountLocked,
    InvalidCredentials,
)

__all__ = [
    "AccessDenied",
    "AccountLocked",
    "InvalidCredentials",
    "ProfileMissingError",
]
