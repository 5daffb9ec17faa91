"""
Defines a base model for SQLAlchemy ORM with common attributes.

This module provides a base class for SQLAlchemy models, including an integer
primary key and timestamping of records. Stored file paths are derived from the
integer id, so it is assigned by the database on the first flush.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """Adds ``created_at`` and ``updated_at`` columns managed on insert and update."""

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)


class BaseModel(TimestampMixin, Base):
    """
    Base model class for database entities.

    This abstract base model class serves as the foundation for all database
    entities, providing an autoincrementing id and tracking of record creation
    and modification timestamps.

    :ivar id: Unique identifier for the record, ``None`` until flushed.
    :type id: int
    :ivar created_at: Timestamp representing when the record was created.
    :type created_at: datetime
    :ivar updated_at: Timestamp representing when the record was last updated.
    :type updated_at: datetime
    """
    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True)
