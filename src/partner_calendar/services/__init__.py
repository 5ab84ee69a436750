"""
Core services.

- partner_graph: partner invitations, answers and accepted-partner resolution
- visibility: which events a viewer may read
- event_service: owner-only event and participant mutation
- collaboration_service: comments and reactions
- external_calendar_service: linked external calendar records
- user_service: user registration and lookup
"""

from partner_calendar.services.partner_graph import PartnerGraphService, PartnerEntry
from partner_calendar.services.visibility import VisibilityService
from partner_calendar.services.event_service import EventLifecycleService, EventParticipants
from partner_calendar.services.collaboration_service import (
    CollaborationLedger,
    CommentThread,
    group_comment_threads,
)
from partner_calendar.services.external_calendar_service import ExternalCalendarService
from partner_calendar.services.user_service import UserService

__all__ = [
    "PartnerGraphService",
    "PartnerEntry",
    "VisibilityService",
    "EventLifecycleService",
    "EventParticipants",
    "CollaborationLedger",
    "CommentThread",
    "group_comment_threads",
    "ExternalCalendarService",
    "UserService",
]
