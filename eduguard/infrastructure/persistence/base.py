"""Base model, column types and mixins for all database models.

This module provides:
- UTCDateTime: timezone-aware timestamp column (UTC in, UTC out)
- BaseModel: base class for ALL models (id, created_at)
- TimestampMixin / BaseMutableModel: adds updated_at
- SoftDeleteMixin: adds deleted_at for soft-deletable records

Domain entities do NOT inherit from these; repositories map between them.

Note:
    PostgreSQL (asyncpg) stores timestamptz natively. SQLite has no
    timezone support, so UTCDateTime normalises to UTC on write and
    re-attaches UTC on read; comparisons bound through the column type see
    the same normalisation.
"""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID as PythonUUID

from sqlalchemy import DateTime, Dialect, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator
from uuid_extensions import uuid7


class UTCDateTime(TypeDecorator[datetime]):
    """DateTime column that always round-trips aware UTC datetimes."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(
        self, value: datetime | None, dialect: Dialect
    ) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("naive datetime bound to a UTC column")
        return value.astimezone(UTC)

    def process_result_value(
        self, value: datetime | None, dialect: Dialect
    ) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class BaseModel(DeclarativeBase):
    """Base class for all database models.

    Provides:
    - id: UUID primary key (time-ordered v7 when not supplied)
    - created_at: creation timestamp (UTC)
    """

    __abstract__ = True

    id: Mapped[PythonUUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid7,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"

    def to_dict(self) -> dict[str, Any]:
        """Dictionary form for debugging/logging."""
        return {
            "id": str(self.id),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class TimestampMixin:
    """Adds updated_at to mutable models."""

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()  # type: ignore[misc]
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return data


class SoftDeleteMixin:
    """Adds deleted_at; a non-null value hides the row from every role.

    Only an admin scoping a query as another account with include_trashed
    sees soft-deleted rows.
    """

    deleted_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime,
        nullable=True,
        default=None,
        comment="Soft-delete marker (NULL = live row)",
    )


class BaseMutableModel(TimestampMixin, BaseModel):
    """Recommended base for models that can be updated.

    Provides id, created_at and updated_at.
    """

    __abstract__ = True
