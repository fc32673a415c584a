"""Stateless domain policies (password rules, consent predicates)."""

from eduguard.domain.policies.consent_policies import (
    DataProcessingConsentPolicy,
    GuardianConsentPolicy,
)
from eduguard.domain.policies.password_policy import (
    Accepted,
    PasswordPolicy,
    PasswordStrength,
    PasswordVerdict,
    Rejected,
)

__all__ = [
    "Accepted",
    "DataProcessingConsentPolicy",
    "GuardianConsentPolicy",
    "PasswordPolicy",
    "PasswordStrength",
    "PasswordVerdict",
    "Rejected",
]
