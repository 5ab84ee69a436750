"""
Visibility Service

Computes which events a viewer may read. Two predicates with different
contracts live here and are intentionally kept apart:

- the bulk feed (`list_shared_events`) returns partner/public events of
  the viewer's accepted partners and nothing else;
- direct access (`can_view`) additionally honors explicit participant
  grants, so a private event shared by invitation is readable by its
  participants even though it never appears in the feed.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from partner_calendar.core.config import Settings
from partner_calendar.core.exceptions import ForbiddenException, NotFoundException
from partner_calendar.models import Event, Permission, PrivacyLevel
from partner_calendar.services.base_service import BaseService
from partner_calendar.services.partner_graph import PartnerGraphService

FEED_PRIVACY_LEVELS = (PrivacyLevel.PARTNER, PrivacyLevel.PUBLIC)


def _empty_range(start: Optional[date], end: Optional[date]) -> bool:
    return start is not None and end is not None and start > end


class VisibilityService(BaseService):
    """Read-side access rules for events."""

    def __init__(
        self,
        db: Session,
        settings: Optional[Settings] = None,
        partner_graph: Optional[PartnerGraphService] = None,
    ):
        super().__init__(db, settings, service_name="VISIBILITY")
        self.partner_graph = partner_graph or PartnerGraphService(db, self.settings)

    # ========================================================================
    # Feeds
    # ========================================================================

    def list_own_events(
        self,
        viewer_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[Event]:
        """
        Every event the viewer owns, whatever its privacy.

        Args:
            viewer_id: Authenticated user
            start: Inclusive first date (filters only when end is also given)
            end: Inclusive last date

        Returns:
            Events ordered by (date, start_time), ties in insertion order.
            An inverted range yields an empty list.
        """
        if _empty_range(start, end):
            return []
        return self.uow().events.list_by_owner(viewer_id, start, end)

    def list_shared_events(
        self,
        viewer_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[Event]:
        """
        Partner and public events owned by the viewer's accepted partners.

        Participant grants are not consulted here; see can_view.
        """
        if _empty_range(start, end):
            return []
        partner_ids = self.partner_graph.get_accepted_partner_ids(viewer_id)
        if not partner_ids:
            return []
        return self.uow().events.list_by_owners_and_privacy(partner_ids, FEED_PRIVACY_LEVELS, start, end)

    def list_calendar(
        self,
        viewer_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[Event]:
        """Own events followed by shared events, without duplicates."""
        own = self.list_own_events(viewer_id, start, end)
        seen = {event.id for event in own}
        shared = [event for event in self.list_shared_events(viewer_id, start, end) if event.id not in seen]
        return own + shared

    # ========================================================================
    # Direct access
    # ========================================================================

    def can_view_event(self, viewer_id: int, event: Event) -> bool:
        if event.owner_id == viewer_id:
            return True
        if event.privacy == PrivacyLevel.PUBLIC:
            return True
        if event.privacy == PrivacyLevel.PARTNER and event.owner_id in self.partner_graph.get_accepted_partner_ids(viewer_id):
            return True
        return self.uow().participants.get_grant(event.id, viewer_id) is not None

    def can_view(self, viewer_id: int, event_id: int) -> bool:
        """
        True if the viewer owns the event, it is public, it is partner-level
        and its owner is an accepted partner, or the viewer holds any
        participant grant on it. Unknown events are not viewable.
        """
        event = self.uow().events.get(event_id)
        if event is None:
            return False
        return self.can_view_event(viewer_id, event)

    def can_edit(self, viewer_id: int, event_id: int) -> bool:
        """True for the owner and for participants holding an edit grant."""
        event = self.uow().events.get(event_id)
        if event is None:
            return False
        if event.owner_id == viewer_id:
            return True
        grant = self.uow().participants.get_grant(event_id, viewer_id)
        return grant is not None and grant.permission == Permission.EDIT

    def require_view(self, viewer_id: int, event_id: int) -> Event:
        """
        Load an event the viewer may read.

        Raises:
            NotFoundException: No such event
            ForbiddenException: The viewer may not read it
        """
        event = self.uow().events.get(event_id)
        if event is None:
            raise NotFoundException("Event", event_id)
        if not self.can_view_event(viewer_id, event):
            self.logger.warning(f"User {viewer_id} denied read access to event {event_id}")
            raise ForbiddenException("Not authorized to view this event")
        return event
