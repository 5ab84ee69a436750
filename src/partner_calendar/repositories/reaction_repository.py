"""
Reaction Repository

Data access layer for event reactions.
"""

from typing import List
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from partner_calendar.models.base import utcnow
from partner_calendar.models.collaboration import Reaction
from partner_calendar.repositories.base import BaseRepository
from partner_calendar.core.exceptions import DatabaseException


class ReactionRepository(BaseRepository[Reaction]):
    """Repository for reactions."""

    def __init__(self, db: Session):
        super().__init__(Reaction, db)

    def upsert_for_user(self, event_id: int, user_id: int, reaction_type: str) -> Reaction:
        """
        Set the user's reaction on an event, replacing any previous one.

        The replacement happens inside the INSERT, so concurrent calls by the
        same user end with the last writer's type rather than a conflict.
        """
        self.upsert_row(
            {"event_id": event_id, "user_id": user_id, "type": reaction_type, "created_at": utcnow()},
            conflict_columns=("event_id", "user_id"),
            update_columns=("type", "created_at"),
        )
        try:
            return (
                self.db.query(Reaction)
                .filter(Reaction.event_id == event_id, Reaction.user_id == user_id)
                .populate_existing()
                .one()
            )
        except SQLAlchemyError as e:
            raise DatabaseException(
                f"Failed to load reaction of user {user_id} on event {event_id}"
            ) from e

    def delete_for_user(self, event_id: int, user_id: int) -> int:
        """
        Remove the user's reaction on an event.

        Returns:
            Number of rows removed (0 or 1)
        """
        try:
            removed = (
                self.db.query(Reaction)
                .filter(Reaction.event_id == event_id, Reaction.user_id == user_id)
                .delete(synchronize_session="fetch")
            )
            self.db.flush()
            return removed
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseException(
                f"Failed to remove reaction of user {user_id} on event {event_id}"
            ) from e

    def list_for_event(self, event_id: int) -> List[Reaction]:
        try:
            return (
                self.db.query(Reaction)
                .filter(Reaction.event_id == event_id)
                .order_by(Reaction.created_at, Reaction.id)
                .all()
            )
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to list reactions for event {event_id}") from e
