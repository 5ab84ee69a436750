"""
Comment and Reaction ORM models.

Comments form a two-level forest per event (top-level comments and their
replies). Reactions are limited to one per user per event.
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from partner_calendar.models.base import Base, CreatedAtMixin


class Comment(CreatedAtMixin, Base):
    """Comment on an event, optionally replying to a top-level comment."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    parent_id = Column(Integer, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True)

    event = relationship("Event", back_populates="comments")
    user = relationship("User")
    parent = relationship("Comment", remote_side=[id])


class Reaction(CreatedAtMixin, Base):
    """Reaction of one user to one event. (event_id, user_id) is unique."""

    __tablename__ = "reactions"
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_reaction_event_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    type = Column(String(50), nullable=False)

    event = relationship("Event", back_populates="reactions")
