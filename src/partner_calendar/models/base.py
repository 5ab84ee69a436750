"""
Base SQLAlchemy declarative class and common model mixins.

This module provides the foundation for all ORM models in the application.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base


# Create base declarative class
Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CreatedAtMixin:
    """
    Mixin that adds an immutable creation timestamp.

    Attributes:
        created_at: Timestamp when the record was created (UTC)
    """

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
