"""
Event ORM models.

An Event is a single scheduled occurrence owned by exactly one user.
EventParticipant rows grant other users per-event view/edit access.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Time,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from partner_calendar.models.base import Base, CreatedAtMixin
from partner_calendar.models.enums import Period, PrivacyLevel, Permission, RecurrenceType


def _values(enum_cls):
    return [member.value for member in enum_cls]


class Event(CreatedAtMixin, Base):
    """
    Calendar event.

    Attributes:
        id: Primary key
        title: Display title
        date: Calendar date of the occurrence
        start_time: Start clock time
        end_time: Optional end clock time
        period: morning/afternoon/night bucket, set independently of start_time
        location: Optional free-text location
        emoji: Optional icon
        privacy: private/partner/public visibility tier
        owner_id: Owning user; fixed at creation
        recurrence: Stored recurrence type, never expanded
        recurrence_end_date: Optional end of the recurrence
        is_special: Flag used for countdown banners
    """

    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=True)
    period = Column(Enum(Period, name="time_period", values_callable=_values), nullable=False)
    location = Column(String(255), nullable=True)
    emoji = Column(String(32), nullable=True)
    privacy = Column(
        Enum(PrivacyLevel, name="privacy_level", values_callable=_values),
        nullable=False,
        default=PrivacyLevel.PRIVATE,
    )
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    recurrence = Column(
        Enum(RecurrenceType, name="recurrence_type", values_callable=_values),
        nullable=False,
        default=RecurrenceType.NONE,
    )
    recurrence_end_date = Column(Date, nullable=True)
    is_special = Column(Boolean, nullable=False, default=False)

    owner = relationship("User", back_populates="events")
    participants = relationship(
        "EventParticipant",
        back_populates="event",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    comments = relationship(
        "Comment",
        back_populates="event",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    reactions = relationship(
        "Reaction",
        back_populates="event",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class EventParticipant(CreatedAtMixin, Base):
    """Per-event, per-user access grant. (event_id, user_id) is unique."""

    __tablename__ = "event_participants"
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_event_participant"),
    )

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    permission = Column(
        Enum(Permission, name="permission_level", values_callable=_values),
        nullable=False,
        default=Permission.VIEW,
    )

    event = relationship("Event", back_populates="participants")
    user = relationship("User")


# Calendar feeds filter by owner and date together
Index("idx_events_owner_date", Event.owner_id, Event.date, Event.start_time)
