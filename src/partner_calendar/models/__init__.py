"""
ORM Models package.

This package contains all SQLAlchemy ORM models organized by domain.
All models are imported here for easy access and to ensure proper
model registration with SQLAlchemy.

Usage:
    from partner_calendar.models import Event, PartnerLink, Comment
    from partner_calendar.models.base import Base
    from partner_calendar.models.enums import PrivacyLevel, PartnerStatus
"""

from partner_calendar.models.base import Base, CreatedAtMixin
from partner_calendar.models.enums import (
    PrivacyLevel,
    Period,
    Permission,
    RecurrenceType,
    PartnerStatus,
)

from partner_calendar.models.user import User
from partner_calendar.models.event import Event, EventParticipant
from partner_calendar.models.collaboration import Comment, Reaction
from partner_calendar.models.partner import PartnerLink
from partner_calendar.models.external_calendar import ExternalCalendar

__all__ = [
    # Base classes
    "Base",
    "CreatedAtMixin",

    # Enums
    "PrivacyLevel",
    "Period",
    "Permission",
    "RecurrenceType",
    "PartnerStatus",

    # Models
    "User",
    "Event",
    "EventParticipant",
    "Comment",
    "Reaction",
    "PartnerLink",
    "ExternalCalendar",
]
