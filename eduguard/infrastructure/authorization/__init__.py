"""Row-level security adapters."""

from eduguard.infrastructure.authorization.row_level_security import (
    RowLevelSecurity,
    entity_kind_of,
)

__all__ = ["RowLevelSecurity", "entity_kind_of"]
