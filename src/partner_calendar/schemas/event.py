"""
Event Pydantic Schemas

Drafts and patches are validated here; the lifecycle service converts
failures into a ValidationException listing every invalid field.
"""

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from partner_calendar.models.enums import Period, Permission, PrivacyLevel, RecurrenceType
from partner_calendar.schemas.user import UserPublic


# Columns that may not be cleared by a patch
REQUIRED_EVENT_FIELDS = ("title", "date", "start_time", "period", "privacy", "recurrence", "is_special")


def _clean_title(value):
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("title must not be empty")
    return value


class EventDraft(BaseModel):
    """Fields of a new event. The owner comes from the caller's identity."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., max_length=255)
    date: dt.date
    start_time: dt.time
    end_time: Optional[dt.time] = None
    period: Period
    location: Optional[str] = Field(None, max_length=255)
    emoji: Optional[str] = Field(None, max_length=32)
    privacy: PrivacyLevel = PrivacyLevel.PRIVATE
    recurrence: RecurrenceType = RecurrenceType.NONE
    recurrence_end_date: Optional[dt.date] = None
    is_special: bool = False

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return _clean_title(v)


class EventPatch(BaseModel):
    """Partial update; only fields explicitly provided are applied."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, max_length=255)
    date: Optional[dt.date] = None
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    period: Optional[Period] = None
    location: Optional[str] = Field(None, max_length=255)
    emoji: Optional[str] = Field(None, max_length=32)
    privacy: Optional[PrivacyLevel] = None
    recurrence: Optional[RecurrenceType] = None
    recurrence_end_date: Optional[dt.date] = None
    is_special: Optional[bool] = None

    @field_validator(*REQUIRED_EVENT_FIELDS)
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return _clean_title(v)


class ParticipantGrant(BaseModel):
    """
    Requested access for one user.

    permission is left as a raw string; the lifecycle service normalizes
    missing values to "view" and applies the configured policy to unknown ones.
    """

    user_id: int
    permission: Optional[str] = None


class CreateEventRequest(EventDraft):
    """Request schema for creating an event with optional grants."""

    partners: List[ParticipantGrant] = Field(default_factory=list)


class UpdateEventRequest(EventPatch):
    """Request schema for updating an event with optional grants."""

    partners: List[ParticipantGrant] = Field(default_factory=list)


class AddParticipantRequest(ParticipantGrant):
    """Request schema for granting a single participant."""


class SetPermissionRequest(BaseModel):
    """Request schema for changing a participant's permission."""

    user_id: int
    permission: str = Field(..., min_length=1)


class EventResponse(BaseModel):
    """Response schema for an event."""

    id: int
    title: str
    date: dt.date
    start_time: dt.time
    end_time: Optional[dt.time] = None
    period: Period
    location: Optional[str] = None
    emoji: Optional[str] = None
    privacy: PrivacyLevel
    owner_id: int
    recurrence: RecurrenceType
    recurrence_end_date: Optional[dt.date] = None
    is_special: bool
    created_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


class ParticipantResponse(BaseModel):
    """Response schema for a participant grant joined with the user's profile."""

    id: int
    event_id: int
    user_id: int
    permission: Permission
    created_at: dt.datetime
    user: Optional[UserPublic] = None

    model_config = ConfigDict(from_attributes=True)


class EventParticipantsResponse(BaseModel):
    """Owner and participants of an event."""

    owner: UserPublic
    participants: List[ParticipantResponse]
