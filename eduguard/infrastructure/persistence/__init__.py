"""Persistence layer (SQLAlchemy async)."""

from eduguard.infrastructure.persistence.base import BaseModel, BaseMutableModel
from eduguard.infrastructure.persistence.database import Database

__all__ = ["BaseModel", "BaseMutableModel", "Database"]
