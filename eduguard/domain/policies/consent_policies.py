"""Consent predicates.

Two independent policies that the consent gate composes, and that other
features (e.g. data export) can reuse on their own:

    - GuardianConsentPolicy: a minor needs at least one active guardian grant
    - DataProcessingConsentPolicy: every account needs recorded data
      processing consent (flag and timestamp)
"""

from datetime import datetime

from eduguard.domain.entities import Account, StudentProfile
from eduguard.domain.entities.student_profile import DEFAULT_CONSENT_AGE
from eduguard.domain.enums import DenialKind, Gate
from eduguard.domain.value_objects.authorization_decision import AuthorizationDecision

DATA_PROCESSING_CONSENT_REQUIRED = "Data processing consent required"


class GuardianConsentPolicy:
    """Minors need an active guardian consent grant.

    Args:
        consent_age: Age of digital consent (16 by default).
    """

    def __init__(self, consent_age: int = DEFAULT_CONSENT_AGE) -> None:
        self._consent_age = consent_age

    @property
    def denial_message(self) -> str:
        return (
            f"Student is under {self._consent_age} years old and requires "
            "guardian consent to access this resource"
        )

    def applies_to(self, profile: StudentProfile, now: datetime) -> bool:
        """True if the student is below the age of digital consent at ``now``."""
        return profile.requires_guardian_consent(now.date(), self._consent_age)

    def check(self, profile: StudentProfile, now: datetime) -> AuthorizationDecision:
        """Allow unless the student is a minor without an active grant."""
        if not self.applies_to(profile, now):
            return AuthorizationDecision.allow(Gate.CONSENT)
        if profile.has_active_guardian_consent(now):
            return AuthorizationDecision.allow(Gate.CONSENT)
        return AuthorizationDecision.deny(
            Gate.CONSENT,
            DenialKind.GUARDIAN_CONSENT_REQUIRED,
            self.denial_message,
            consent_age=self._consent_age,
        )


class DataProcessingConsentPolicy:
    """Every account must have recorded data processing consent."""

    def check(self, account: Account) -> AuthorizationDecision:
        """Allow iff the consent flag and its timestamp are both set."""
        if account.has_data_processing_consent():
            return AuthorizationDecision.allow(Gate.CONSENT)
        return AuthorizationDecision.deny(
            Gate.CONSENT,
            DenialKind.DATA_PROCESSING_CONSENT_REQUIRED,
            DATA_PROCESSING_CONSENT_REQUIRED,
        )
