"""
Repositories package.

This package contains all data access layer repositories following the Repository Pattern.
Each repository extends BaseRepository and provides domain-specific data operations.
Repositories stage and flush; the UnitOfWork commits.

Usage:
    from partner_calendar.repositories import UnitOfWork

    with UnitOfWork(db) as uow:
        event = uow.events.get_or_fail(event_id)
        uow.reactions.delete_for_user(event.id, user_id)
        uow.commit()
"""

from partner_calendar.repositories.base import BaseRepository
from partner_calendar.repositories.user_repository import UserRepository
from partner_calendar.repositories.event_repository import EventRepository, EventParticipantRepository
from partner_calendar.repositories.comment_repository import CommentRepository
from partner_calendar.repositories.reaction_repository import ReactionRepository
from partner_calendar.repositories.partner_repository import PartnerRepository
from partner_calendar.repositories.external_calendar_repository import ExternalCalendarRepository
from partner_calendar.repositories.unit_of_work import UnitOfWork

__all__ = [
    "BaseRepository",
    "UserRepository",
    "EventRepository",
    "EventParticipantRepository",
    "CommentRepository",
    "ReactionRepository",
    "PartnerRepository",
    "ExternalCalendarRepository",
    "UnitOfWork",
]
