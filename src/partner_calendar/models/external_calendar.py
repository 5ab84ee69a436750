"""
External calendar ORM model.

Descriptive record of a linked Google/Apple/Outlook calendar. No sync
logic is attached to it.
"""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from partner_calendar.models.base import Base, CreatedAtMixin


class ExternalCalendar(CreatedAtMixin, Base):
    """Linked external calendar owned by a user."""

    __tablename__ = "external_calendars"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    provider = Column(String(50), nullable=False)
    external_id = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    color = Column(String(32), nullable=True)
    sync_enabled = Column(Boolean, nullable=False, default=True)

    user = relationship("User", back_populates="external_calendars")
