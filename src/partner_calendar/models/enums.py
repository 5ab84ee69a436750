"""
Enumeration types used across ORM models.

This module centralizes all enum definitions to ensure consistency
across the application and make them easy to import. Values are the
strings stored in the database and exchanged over the API.
"""

import enum


class PrivacyLevel(str, enum.Enum):
    """
    Visibility tier of an event.

    Attributes:
        PRIVATE: Owner plus explicit participant grants only
        PARTNER: Owner, accepted partners and explicit grants
        PUBLIC: Everyone
    """
    PRIVATE = "private"
    PARTNER = "partner"
    PUBLIC = "public"


class Period(str, enum.Enum):
    """Coarse daily bucket used to group events, independent of clock time."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    NIGHT = "night"


class Permission(str, enum.Enum):
    """
    Per-event permission granted to a participant.

    Attributes:
        VIEW: Read access to the event and its sub-resources
        EDIT: Read access plus edit rights on sub-resources
    """
    VIEW = "view"
    EDIT = "edit"


class RecurrenceType(str, enum.Enum):
    """Descriptive recurrence metadata; never expanded into instances."""
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


class PartnerStatus(str, enum.Enum):
    """
    Status of a partner link.

    Attributes:
        PENDING: Invitation sent, not yet answered
        ACCEPTED: Invitee accepted (terminal)
        REJECTED: Invitee declined (terminal)
    """
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
