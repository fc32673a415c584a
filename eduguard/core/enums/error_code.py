"""Machine-readable error codes.

The values are the stable codes surfaced to API clients, so renaming one is
a breaking change for every consumer.

Categories:
- Validation (VALIDATION_ERROR, PASSWORD_TOO_WEAK)
- Resources (NOT_FOUND, DUPLICATE_RESOURCE)
- Authentication (INVALID_CREDENTIALS, ACCOUNT_LOCKED, AUTHENTICATION_FAILED)
- Consent and authorization (GDPR_CONSENT_REQUIRED, AUTHORIZATION_FAILED)
- Collaborator failures (INTERNAL_ERROR)
"""

from enum import Enum


class ErrorCode(Enum):
    """Stable error codes shared by the domain and presentation layers."""

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    PASSWORD_TOO_WEAK = "PASSWORD_TOO_WEAK"

    # Resource errors
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"

    # Authentication errors
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_LOCKED = "ACCOUNT_LOCKED"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"

    # Consent and authorization errors
    GDPR_CONSENT_REQUIRED = "GDPR_CONSENT_REQUIRED"
    AUTHORIZATION_FAILED = "AUTHORIZATION_FAILED"

    # Guardian consent workflow
    CONSENT_ALREADY_REVOKED = "CONSENT_ALREADY_REVOKED"

    # Collaborator failures
    INTERNAL_ERROR = "INTERNAL_ERROR"
