"""Command handlers."""

from eduguard.application.commands.handlers.authenticate_account_handler import (
    AuthenticateAccountHandler,
)
from eduguard.application.commands.handlers.guardian_consent_handlers import (
    GrantGuardianConsentHandler,
    RevokeGuardianConsentHandler,
)
from eduguard.application.commands.handlers.issue_access_token_handler import (
    IssueAccessTokenHandler,
)
from eduguard.application.commands.handlers.register_account_handler import (
    RegisterAccountHandler,
)

__all__ = [
    "AuthenticateAccountHandler",
    "GrantGuardianConsentHandler",
    "IssueAccessTokenHandler",
    "RegisterAccountHandler",
    "RevokeGuardianConsentHandler",
]
