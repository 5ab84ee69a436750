"""
Unit of Work Pattern

This module implements the Unit of Work pattern to coordinate transactions
across multiple repositories. Every core operation that touches more than
one row runs inside a single Unit of Work and commits once, so a failure
part-way through leaves nothing behind.

Usage:
    with UnitOfWork(db) as uow:
        event = uow.events.add(Event(...))
        uow.participants.upsert(event.id, partner_id, Permission.VIEW)
        uow.commit()  # Commits all changes atomically
    # Automatic rollback on exception
"""

from sqlalchemy.orm import Session
import logging

from partner_calendar.repositories.user_repository import UserRepository
from partner_calendar.repositories.event_repository import EventRepository, EventParticipantRepository
from partner_calendar.repositories.comment_repository import CommentRepository
from partner_calendar.repositories.reaction_repository import ReactionRepository
from partner_calendar.repositories.partner_repository import PartnerRepository
from partner_calendar.repositories.external_calendar_repository import ExternalCalendarRepository

logger = logging.getLogger("UNIT_OF_WORK")


class UnitOfWork:
    """
    Unit of Work pattern implementation for coordinating transactions.

    All repositories share the same database session, so changes across
    repositories can be committed or rolled back together.

    Attributes:
        db: SQLAlchemy database session
        users: UserRepository instance
        events: EventRepository instance
        participants: EventParticipantRepository instance
        comments: CommentRepository instance
        reactions: ReactionRepository instance
        partners: PartnerRepository instance
        external_calendars: ExternalCalendarRepository instance
    """

    def __init__(self, db: Session):
        self.db = db
        self._committed = False

        self.users = UserRepository(db)
        self.events = EventRepository(db)
        self.participants = EventParticipantRepository(db)
        self.comments = CommentRepository(db)
        self.reactions = ReactionRepository(db)
        self.partners = PartnerRepository(db)
        self.external_calendars = ExternalCalendarRepository(db)

    def commit(self) -> None:
        """
        Commit all pending changes in the current transaction.

        Raises:
            Exception: If commit fails, after rolling back
        """
        try:
            self.db.commit()
            self._committed = True
            logger.debug("Unit of Work committed successfully")
        except Exception as e:
            logger.error(f"Error during commit, rolling back: {e}")
            self.rollback()
            raise

    def rollback(self) -> None:
        """Roll back all pending changes in the current transaction."""
        try:
            self.db.rollback()
            logger.debug("Unit of Work rolled back")
        except Exception as e:
            logger.error(f"Error during rollback: {e}")
            raise

    def flush(self) -> None:
        """Flush pending changes without committing."""
        self.db.flush()

    def refresh(self, obj) -> None:
        """Reload an object's state from the database."""
        self.db.refresh(obj)

    def __enter__(self):
        self._committed = False
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """
        Roll back if the block raised before committing.

        Returns:
            False to propagate exceptions
        """
        if exc_type is not None and not self._committed:
            logger.warning(f"Exception in Unit of Work context, rolling back: {exc_type.__name__}")
            self.rollback()
        return False

