"""
SQLAlchemy base class and common utilities.
"""

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()

class TimestampMixin:
    """Mixin to add created_at and updated_at timestamps to models."""

    created_at = Column(DateTime(timezone=True), default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now(), nullable=False)

class CreatedAtMixin:
    """Mixin for append-only records that are never updated."""

    created_at = Column(DateTime(timezone=True), default=func.now(), nullable=False, index=True)
