"""
External Calendars API
"""

from typing import List

from fastapi import APIRouter, Depends, status

from partner_calendar.core.dependencies import get_current_user_id, get_external_calendar_service
from partner_calendar.schemas.external_calendar import (
    CreateExternalCalendarRequest,
    ExternalCalendarResponse,
)
from partner_calendar.services import ExternalCalendarService


router = APIRouter(
    prefix="/external-calendars",
    tags=["External Calendars"]
)


@router.get("", response_model=List[ExternalCalendarResponse])
def list_external_calendars(
    user_id: int = Depends(get_current_user_id),
    service: ExternalCalendarService = Depends(get_external_calendar_service),
):
    return [ExternalCalendarResponse.model_validate(c) for c in service.list_external_calendars(user_id)]


@router.post("", response_model=ExternalCalendarResponse, status_code=status.HTTP_201_CREATED)
def add_external_calendar(
    request: CreateExternalCalendarRequest,
    user_id: int = Depends(get_current_user_id),
    service: ExternalCalendarService = Depends(get_external_calendar_service),
):
    return ExternalCalendarResponse.model_validate(service.add_external_calendar(user_id, request))
