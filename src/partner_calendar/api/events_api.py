"""
Calendar Events API
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from partner_calendar.core.dependencies import (
    get_current_user_id,
    get_event_service,
    get_visibility_service,
)
from partner_calendar.schemas.event import (
    AddParticipantRequest,
    CreateEventRequest,
    EventParticipantsResponse,
    EventResponse,
    ParticipantResponse,
    SetPermissionRequest,
    UpdateEventRequest,
)
from partner_calendar.schemas.user import UserPublic
from partner_calendar.services import EventLifecycleService, VisibilityService


router = APIRouter(
    prefix="/events",
    tags=["Events"]
)


def _events(events) -> List[EventResponse]:
    return [EventResponse.model_validate(event) for event in events]


@router.get("", response_model=List[EventResponse])
def list_own_events(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    user_id: int = Depends(get_current_user_id),
    visibility: VisibilityService = Depends(get_visibility_service),
):
    return _events(visibility.list_own_events(user_id, start_date, end_date))


@router.get("/shared", response_model=List[EventResponse])
def list_shared_events(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    user_id: int = Depends(get_current_user_id),
    visibility: VisibilityService = Depends(get_visibility_service),
):
    return _events(visibility.list_shared_events(user_id, start_date, end_date))


@router.get("/calendar", response_model=List[EventResponse])
def list_calendar(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    user_id: int = Depends(get_current_user_id),
    visibility: VisibilityService = Depends(get_visibility_service),
):
    return _events(visibility.list_calendar(user_id, start_date, end_date))


@router.get("/{event_id}", response_model=EventResponse)
def get_event(
    event_id: int,
    user_id: int = Depends(get_current_user_id),
    service: EventLifecycleService = Depends(get_event_service),
):
    return EventResponse.model_validate(service.get_event(user_id, event_id))


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    request: CreateEventRequest,
    user_id: int = Depends(get_current_user_id),
    service: EventLifecycleService = Depends(get_event_service),
):
    event = service.create_event(user_id, request, request.partners)
    return EventResponse.model_validate(event)


@router.put("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: int,
    request: UpdateEventRequest,
    user_id: int = Depends(get_current_user_id),
    service: EventLifecycleService = Depends(get_event_service),
):
    event = service.update_event(user_id, event_id, request, request.partners)
    return EventResponse.model_validate(event)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: int,
    user_id: int = Depends(get_current_user_id),
    service: EventLifecycleService = Depends(get_event_service),
):
    service.delete_event(user_id, event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# Participants
# ============================================================================

@router.get("/{event_id}/participants", response_model=EventParticipantsResponse)
def list_participants(
    event_id: int,
    user_id: int = Depends(get_current_user_id),
    service: EventLifecycleService = Depends(get_event_service),
):
    result = service.list_participants(user_id, event_id)
    return EventParticipantsResponse(
        owner=UserPublic.model_validate(result.owner),
        participants=[ParticipantResponse.model_validate(p) for p in result.participants],
    )


@router.post("/{event_id}/participants", response_model=ParticipantResponse, status_code=status.HTTP_201_CREATED)
def add_participant(
    event_id: int,
    request: AddParticipantRequest,
    user_id: int = Depends(get_current_user_id),
    service: EventLifecycleService = Depends(get_event_service),
):
    grant = service.add_participant(user_id, event_id, request.user_id, request.permission)
    return ParticipantResponse.model_validate(grant)


@router.delete("/{event_id}/participants/{participant_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_participant(
    event_id: int,
    participant_id: int,
    user_id: int = Depends(get_current_user_id),
    service: EventLifecycleService = Depends(get_event_service),
):
    service.remove_participant(user_id, event_id, participant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{event_id}/permissions", response_model=ParticipantResponse)
def set_permission(
    event_id: int,
    request: SetPermissionRequest,
    user_id: int = Depends(get_current_user_id),
    service: EventLifecycleService = Depends(get_event_service),
):
    grant = service.set_permission(user_id, event_id, request.user_id, request.permission)
    return ParticipantResponse.model_validate(grant)
