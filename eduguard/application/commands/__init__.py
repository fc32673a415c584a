"""Application commands."""

from eduguard.application.commands.auth_commands import (
    AuthenticateAccount,
    IssueAccessToken,
    IssuedAccessToken,
    RegisterAccount,
)
from eduguard.application.commands.consent_commands import (
    GrantGuardianConsent,
    RevokeGuardianConsent,
)

__all__ = [
    "AuthenticateAccount",
    "GrantGuardianConsent",
    "IssueAccessToken",
    "IssuedAccessToken",
    "RegisterAccount",
    "RevokeGuardianConsent",
]
