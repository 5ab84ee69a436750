"""
Partner Graph Service

Manages the partner-link lifecycle (invite -> pending -> accepted/rejected)
and answers "whose partner-level events may this user see?".

Links are directional. When the invitee accepts, the inviter's
partner-privacy events become visible to the invitee; the reverse needs a
separate invitation unless `symmetric_partners` is enabled.
"""

from typing import List, NamedTuple, Optional, Set

from sqlalchemy.orm import Session

from partner_calendar.core.config import Settings
from partner_calendar.core.exceptions import (
    ConflictException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from partner_calendar.models import PartnerLink, PartnerStatus, PrivacyLevel, User
from partner_calendar.services.base_service import BaseService

ANSWERS = {PartnerStatus.ACCEPTED.value, PartnerStatus.REJECTED.value}


class PartnerEntry(NamedTuple):
    """A partner link together with the other user's profile."""
    link: PartnerLink
    counterpart: User


class PartnerGraphService(BaseService):
    """Partner invitations, answers, and accepted-partner resolution."""

    def __init__(self, db: Session, settings: Optional[Settings] = None):
        super().__init__(db, settings, service_name="PARTNER_GRAPH")

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def invite_partner(
        self,
        inviter_id: int,
        invitee_email: str,
        share_all: bool = True,
        share_raft_only: bool = False,
    ) -> PartnerLink:
        """
        Invite the user registered under invitee_email.

        Args:
            inviter_id: Authenticated user sending the invitation
            invitee_email: Email of the user to invite
            share_all: Share every partner-level event
            share_raft_only: Share only a subset (descriptive flag)

        Returns:
            The new link, in pending status

        Raises:
            ValidationException: Empty email or self-invitation
            NotFoundException: No user with that email
            ConflictException: Duplicate invitation, when configured to reject them
        """
        email = (invitee_email or "").strip()
        if not email:
            raise ValidationException("Partner email is required", {"partner_email": "Field required"})

        with self.uow() as uow:
            invitee = uow.users.get_by_email(email)
            if invitee is None:
                raise NotFoundException("User", email)
            if invitee.id == inviter_id:
                raise ValidationException(
                    "Cannot invite yourself as a partner",
                    {"partner_email": "Cannot invite yourself as a partner"},
                )
            if self.settings.reject_duplicate_invitations and uow.partners.find_open_link(inviter_id, invitee.id):
                raise ConflictException("PartnerLink", "partner_id", invitee.id)

            link = uow.partners.add(PartnerLink(
                user_id=inviter_id,
                partner_id=invitee.id,
                status=PartnerStatus.PENDING,
                share_all=share_all,
                share_raft_only=share_raft_only,
            ))
            uow.commit()

        self.logger.info(f"User {inviter_id} invited user {link.partner_id} (link {link.id})")
        return link

    def respond_to_request(self, responder_id: int, link_id: int, decision: str) -> PartnerLink:
        """
        Accept or reject a pending invitation addressed to the responder.

        Acceptance and the fan-out of view grants on the inviter's existing
        partner-privacy events commit together.

        Raises:
            ValidationException: decision is not accepted/rejected
            NotFoundException: No pending link with that ID
            ForbiddenException: The responder is not the invitee
        """
        value = decision.value if isinstance(decision, PartnerStatus) else str(decision or "")
        if value not in ANSWERS:
            raise ValidationException(
                "Invalid status value",
                {"status": "status must be accepted or rejected"},
            )
        new_status = PartnerStatus(value)

        with self.uow() as uow:
            link = uow.partners.get_pending_for_update(link_id)
            if link is None:
                raise NotFoundException("Partner request", link_id)
            if link.partner_id != responder_id:
                self.logger.warning(f"User {responder_id} tried to answer link {link_id} addressed to {link.partner_id}")
                raise ForbiddenException("Not authorized to update this request")

            uow.partners.update_fields(link, {"status": new_status})
            granted = 0
            if new_status is PartnerStatus.ACCEPTED:
                granted = self._fan_out(uow, link.user_id, responder_id)
            uow.commit()

        self.logger.info(
            f"User {responder_id} {new_status.value} link {link_id}"
            + (f"; granted view on {granted} events" if new_status is PartnerStatus.ACCEPTED else "")
        )
        return link

    def _fan_out(self, uow, inviter_id: int, invitee_id: int) -> int:
        """
        Grant the invitee view access to the inviter's current partner events.

        The inviter's user row is locked so event creation by the inviter
        cannot interleave with the snapshot. Existing grants are left as they
        are, so an edit grant is never downgraded.
        """
        uow.users.get_for_update(inviter_id)
        events = uow.events.list_by_owners_and_privacy([inviter_id], [PrivacyLevel.PARTNER])
        return sum(1 for event in events if uow.participants.ensure_view(event.id, invitee_id))

    # ========================================================================
    # Queries
    # ========================================================================

    def get_accepted_partner_ids(self, user_id: int) -> Set[int]:
        """
        Users whose partner-privacy events user_id may see.

        These are the inviters of links user_id accepted. With
        `symmetric_partners` the invitees of user_id's own accepted
        invitations are included too.
        """
        ids = self.uow().partners.inviter_ids_accepted_by(user_id)
        if self.settings.symmetric_partners:
            ids |= self.uow().partners.invitee_ids_accepted_from(user_id)
        ids.discard(user_id)
        return ids

    def list_pending_incoming(self, user_id: int) -> List[PartnerEntry]:
        """Invitations waiting for user_id's answer, with the inviter's profile."""
        links = self.uow().partners.list_incoming(user_id, PartnerStatus.PENDING)
        return [PartnerEntry(link, link.inviter) for link in links]

    def list_pending_outgoing(self, user_id: int) -> List[PartnerEntry]:
        """Invitations user_id sent that are still unanswered."""
        links = self.uow().partners.list_outgoing(user_id, PartnerStatus.PENDING)
        return [PartnerEntry(link, link.invitee) for link in links]

    def list_accepted(self, user_id: int) -> List[PartnerEntry]:
        """Accepted links in either direction, each with the other user's profile."""
        links = self.uow().partners.list_involving(user_id, PartnerStatus.ACCEPTED)
        return [
            PartnerEntry(link, link.invitee if link.user_id == user_id else link.inviter)
            for link in links
        ]
