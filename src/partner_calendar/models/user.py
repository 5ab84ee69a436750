"""
User ORM model.

Stores identity and public profile fields. Credentials live with the
external auth provider.
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from partner_calendar.models.base import Base, CreatedAtMixin


class User(CreatedAtMixin, Base):
    """User record with basic identity fields."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    full_name = Column(String(255), nullable=False)
    avatar = Column(String, nullable=True)

    events = relationship("Event", back_populates="owner")
    external_calendars = relationship(
        "ExternalCalendar",
        back_populates="user",
        cascade="all, delete-orphan",
    )
