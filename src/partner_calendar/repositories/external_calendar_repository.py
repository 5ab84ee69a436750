"""
External Calendar Repository

Data access layer for linked external calendars.
"""

from typing import List
from sqlalchemy.orm import Session

from partner_calendar.models.external_calendar import ExternalCalendar
from partner_calendar.repositories.base import BaseRepository


class ExternalCalendarRepository(BaseRepository[ExternalCalendar]):
    """Repository for external calendar records."""

    def __init__(self, db: Session):
        super().__init__(ExternalCalendar, db)

    def list_for_user(self, user_id: int) -> List[ExternalCalendar]:
        return self.get_by_filter({"user_id": user_id})
