"""Domain entities package.

Usage:
    from eduguard.domain.entities import Account, StudentProfile, ConsentGrant
"""

from eduguard.domain.entities.access_token import AccessToken
from eduguard.domain.entities.account import Account
from eduguard.domain.entities.consent_grant import ConsentGrant
from eduguard.domain.entities.student_profile import StudentProfile

__all__ = ["AccessToken", "Account", "ConsentGrant", "StudentProfile"]
