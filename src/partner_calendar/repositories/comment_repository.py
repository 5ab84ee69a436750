"""
Comment Repository

Data access layer for event comments.
"""

from typing import List
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from partner_calendar.models.collaboration import Comment
from partner_calendar.repositories.base import BaseRepository
from partner_calendar.core.exceptions import DatabaseException


class CommentRepository(BaseRepository[Comment]):
    """Repository for comments."""

    def __init__(self, db: Session):
        super().__init__(Comment, db)

    def list_for_event(self, event_id: int) -> List[Comment]:
        """Comments on an event, oldest first."""
        try:
            return (
                self.db.query(Comment)
                .filter(Comment.event_id == event_id)
                .order_by(Comment.created_at, Comment.id)
                .all()
            )
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to list comments for event {event_id}") from e
