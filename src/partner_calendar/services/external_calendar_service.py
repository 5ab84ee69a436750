"""
External Calendar Service

Stores descriptive records of linked external calendars. No sync.
"""

from typing import Any, List, Mapping, Optional, Union

from sqlalchemy.orm import Session

from partner_calendar.core.config import Settings
from partner_calendar.models import ExternalCalendar
from partner_calendar.schemas.external_calendar import CreateExternalCalendarRequest
from partner_calendar.services.base_service import BaseService


class ExternalCalendarService(BaseService):
    """Linked external calendars of a user."""

    def __init__(self, db: Session, settings: Optional[Settings] = None):
        super().__init__(db, settings, service_name="EXTERNAL_CALENDARS")

    def add_external_calendar(
        self,
        user_id: int,
        data: Union[CreateExternalCalendarRequest, Mapping[str, Any]],
    ) -> ExternalCalendar:
        parsed = self.parse(CreateExternalCalendarRequest, data)
        with self.uow() as uow:
            calendar = uow.external_calendars.add(ExternalCalendar(user_id=user_id, **parsed.model_dump()))
            uow.commit()
        self.logger.info(f"User {user_id} linked {calendar.provider} calendar {calendar.id}")
        return calendar

    def list_external_calendars(self, user_id: int) -> List[ExternalCalendar]:
        return self.uow().external_calendars.list_for_user(user_id)
