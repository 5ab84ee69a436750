"""
Event Repository

Data access layer for events and their participant grants. Exposes the
semantic queries the visibility rules are built on: by owner, by owner set
and privacy, and by date range.
"""

import logging
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from partner_calendar.models.base import utcnow
from partner_calendar.models.event import Event, EventParticipant
from partner_calendar.models.enums import Permission, PrivacyLevel
from partner_calendar.repositories.base import BaseRepository
from partner_calendar.core.exceptions import DatabaseException

logger = logging.getLogger("EVENT_REPOSITORY")


class EventRepository(BaseRepository[Event]):
    """Repository for calendar events."""

    def __init__(self, db: Session):
        super().__init__(Event, db)

    def _in_range(self, query, start: Optional[date], end: Optional[date]):
        if start is not None and end is not None:
            query = query.filter(Event.date >= start, Event.date <= end)
        return query

    def _ordered(self, query) -> List[Event]:
        # Ties on (date, start_time) keep insertion order
        return query.order_by(Event.date, Event.start_time, Event.id).all()

    def list_by_owner(
        self,
        owner_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[Event]:
        """
        Events owned by a user, optionally limited to an inclusive date range.

        Args:
            owner_id: Owning user
            start: First date of the range (both bounds required to filter)
            end: Last date of the range

        Returns:
            Events ordered by (date, start_time, id)
        """
        try:
            query = self.db.query(Event).filter(Event.owner_id == owner_id)
            return self._ordered(self._in_range(query, start, end))
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to list events for owner {owner_id}") from e

    def list_by_owners_and_privacy(
        self,
        owner_ids: Iterable[int],
        privacy_levels: Iterable[PrivacyLevel],
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[Event]:
        """Events owned by any of owner_ids whose privacy is in privacy_levels."""
        owners = list(owner_ids)
        levels = list(privacy_levels)
        if not owners or not levels:
            return []
        try:
            query = self.db.query(Event).filter(
                Event.owner_id.in_(owners),
                Event.privacy.in_(levels),
            )
            return self._ordered(self._in_range(query, start, end))
        except SQLAlchemyError as e:
            raise DatabaseException("Failed to list events by owner set") from e


class EventParticipantRepository(BaseRepository[EventParticipant]):
    """Repository for per-event participant grants."""

    def __init__(self, db: Session):
        super().__init__(EventParticipant, db)

    def get_grant(self, event_id: int, user_id: int) -> Optional[EventParticipant]:
        try:
            return (
                self.db.query(EventParticipant)
                .filter(
                    EventParticipant.event_id == event_id,
                    EventParticipant.user_id == user_id,
                )
                .populate_existing()
                .first()
            )
        except SQLAlchemyError as e:
            raise DatabaseException(
                f"Failed to get participant {user_id} for event {event_id}"
            ) from e

    def list_for_event(self, event_id: int) -> List[EventParticipant]:
        return self.get_by_filter({"event_id": event_id})

    def upsert(self, event_id: int, user_id: int, permission: Permission) -> EventParticipant:
        """
        Grant or re-grant access; an existing (event, user) row takes the new permission.
        """
        self.upsert_row(
            {"event_id": event_id, "user_id": user_id, "permission": permission, "created_at": utcnow()},
            conflict_columns=("event_id", "user_id"),
            update_columns=("permission",),
        )
        logger.debug(f"User {user_id} holds {permission.value} on event {event_id}")
        return self.get_grant(event_id, user_id)

    def ensure_view(self, event_id: int, user_id: int) -> bool:
        """
        Make sure the user holds at least view access; an existing grant is kept.

        Returns:
            True if a new grant was created, False if one already existed
        """
        return self.upsert_row(
            {"event_id": event_id, "user_id": user_id, "permission": Permission.VIEW, "created_at": utcnow()},
            conflict_columns=("event_id", "user_id"),
        )

    def remove(self, event_id: int, user_id: int) -> bool:
        grant = self.get_grant(event_id, user_id)
        if grant is None:
            return False
        return self.delete(grant)
