"""Consent gate.

Composes the two consent policies for one request:

1. Student callers: load the student profile (a missing profile raises
   ProfileMissingError) and require an active guardian grant while the
   student is below the age of digital consent.
2. Every caller: require recorded data processing consent.

Re-evaluated on every request; nothing is cached between calls.
"""

from eduguard.domain.entities import Account
from eduguard.domain.enums import AccountRole, Gate
from eduguard.domain.errors import ProfileMissingError
from eduguard.domain.policies import DataProcessingConsentPolicy, GuardianConsentPolicy
from eduguard.domain.protocols import ClockProtocol, StudentProfileRepository
from eduguard.domain.value_objects import AuthorizationDecision


class ConsentGate:
    """Data processing and guardian consent check.

    Args:
        profile_repo: Student profile lookup (grants loaded with the profile).
        clock: Time source for age and grant expiry.
        guardian_policy: Minor consent predicate.
        data_policy: Data processing consent predicate.
    """

    def __init__(
        self,
        profile_repo: StudentProfileRepository,
        clock: ClockProtocol,
        guardian_policy: GuardianConsentPolicy | None = None,
        data_policy: DataProcessingConsentPolicy | None = None,
    ) -> None:
        self._profile_repo = profile_repo
        self._clock = clock
        self._guardian_policy = guardian_policy or GuardianConsentPolicy()
        self._data_policy = data_policy or DataProcessingConsentPolicy()

    async def check(self, account: Account) -> AuthorizationDecision:
        """Decide whether ``account`` has the consent required to proceed.

        Raises:
            ProfileMissingError: Student account without a profile.
        """
        if account.account_role is AccountRole.STUDENT:
            profile = await self._profile_repo.find_by_account_id(account.id)
            if profile is None:
                raise ProfileMissingError(account.id)
            decision = self._guardian_policy.check(profile, self._clock.now())
            if decision.denied:
                return decision

        decision = self._data_policy.check(account)
        if decision.denied:
            return decision
        return AuthorizationDecision.allow(Gate.CONSENT)
