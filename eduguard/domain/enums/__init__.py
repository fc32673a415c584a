"""Domain enums package.

Usage:
    from eduguard.domain.enums import AccountRole, EntityKind
"""

from eduguard.domain.enums.academic_status import AcademicStatus
from eduguard.domain.enums.account_role import SELF_REGISTRABLE_ROLES, AccountRole
from eduguard.domain.enums.authorization import DenialKind, Gate
from eduguard.domain.enums.consent_kind import ConsentKind
from eduguard.domain.enums.entity_kind import EntityKind

__all__ = [
    "AcademicStatus",
    "AccountRole",
    "ConsentKind",
    "DenialKind",
    "EntityKind",
    "Gate",
    "SELF_REGISTRABLE_ROLES",
]
