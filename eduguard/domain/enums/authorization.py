"""Enums describing authorization outcomes.

Gate identifies which check produced a decision; DenialKind is the
machine-readable reason the presentation layer maps to a stable error code.
"""

from enum import Enum


class Gate(str, Enum):
    """Check that produced an authorization decision."""

    CREDENTIALS = "credentials"
    CONSENT = "consent"
    ROLE = "role"
    ROW_SCOPE = "row_scope"


class DenialKind(str, Enum):
    """Why a gate denied a request."""

    INVALID_CREDENTIALS = "invalid_credentials"
    ACCOUNT_LOCKED = "account_locked"
    GUARDIAN_CONSENT_REQUIRED = "guardian_consent_required"
    DATA_PROCESSING_CONSENT_REQUIRED = "data_processing_consent_required"
    ROLE_NOT_ALLOWED = "role_not_allowed"
    RECORD_NOT_ACCESSIBLE = "record_not_accessible"
