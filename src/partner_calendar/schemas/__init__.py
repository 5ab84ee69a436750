"""
Pydantic schemas package.

This package contains all Pydantic models for request/response validation,
organized by domain:
- event: Event drafts, patches, participant grants and responses
- partner: Partner invitations and links
- collaboration: Comments and reactions
- user: User registration and public profiles
- external_calendar: Linked external calendars
- common: Shared/common schemas (errors, base responses)
"""

from partner_calendar.schemas.common import (
    ErrorResponse,
    HealthCheckResponse,
    error_map,
)
from partner_calendar.schemas.user import (
    CreateUserRequest,
    UserPublic,
    UserResponse,
)
from partner_calendar.schemas.event import (
    EventDraft,
    EventPatch,
    ParticipantGrant,
    CreateEventRequest,
    UpdateEventRequest,
    AddParticipantRequest,
    SetPermissionRequest,
    EventResponse,
    ParticipantResponse,
    EventParticipantsResponse,
)
from partner_calendar.schemas.collaboration import (
    CreateCommentRequest,
    CommentResponse,
    CommentThreadResponse,
    CreateReactionRequest,
    ReactionResponse,
)
from partner_calendar.schemas.partner import (
    InvitePartnerRequest,
    PartnerStatusUpdateRequest,
    PartnerLinkResponse,
    PartnerLinkWithUserResponse,
)
from partner_calendar.schemas.external_calendar import (
    CreateExternalCalendarRequest,
    ExternalCalendarResponse,
)

__all__ = [
    # Common
    "ErrorResponse",
    "HealthCheckResponse",
    "error_map",

    # User
    "CreateUserRequest",
    "UserPublic",
    "UserResponse",

    # Event
    "EventDraft",
    "EventPatch",
    "ParticipantGrant",
    "CreateEventRequest",
    "UpdateEventRequest",
    "AddParticipantRequest",
    "SetPermissionRequest",
    "EventResponse",
    "ParticipantResponse",
    "EventParticipantsResponse",

    # Collaboration
    "CreateCommentRequest",
    "CommentResponse",
    "CommentThreadResponse",
    "CreateReactionRequest",
    "ReactionResponse",

    # Partner
    "InvitePartnerRequest",
    "PartnerStatusUpdateRequest",
    "PartnerLinkResponse",
    "PartnerLinkWithUserResponse",

    # External calendars
    "CreateExternalCalendarRequest",
    "ExternalCalendarResponse",
]
