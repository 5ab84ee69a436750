"""
Partner Repository

Data access layer for partner links.
"""

from typing import List, Optional, Set
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import SQLAlchemyError

from partner_calendar.models.partner import PartnerLink
from partner_calendar.models.enums import PartnerStatus
from partner_calendar.repositories.base import BaseRepository
from partner_calendar.core.exceptions import DatabaseException


class PartnerRepository(BaseRepository[PartnerLink]):
    """Repository for partner links."""

    def __init__(self, db: Session):
        super().__init__(PartnerLink, db)

    def _links(self):
        return self.db.query(PartnerLink).options(
            joinedload(PartnerLink.inviter),
            joinedload(PartnerLink.invitee),
        )

    def get_pending_for_update(self, link_id: int) -> Optional[PartnerLink]:
        """A pending link by ID, row-locked for the answering transaction."""
        try:
            return (
                self.db.query(PartnerLink)
                .filter(PartnerLink.id == link_id, PartnerLink.status == PartnerStatus.PENDING)
                .with_for_update()
                .first()
            )
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to load partner link {link_id}") from e

    def list_incoming(self, user_id: int, status: PartnerStatus) -> List[PartnerLink]:
        """Links where the user is the invitee."""
        try:
            return (
                self._links()
                .filter(PartnerLink.partner_id == user_id, PartnerLink.status == status)
                .order_by(PartnerLink.created_at, PartnerLink.id)
                .all()
            )
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to list incoming links for user {user_id}") from e

    def list_outgoing(self, user_id: int, status: PartnerStatus) -> List[PartnerLink]:
        """Links where the user is the inviter."""
        try:
            return (
                self._links()
                .filter(PartnerLink.user_id == user_id, PartnerLink.status == status)
                .order_by(PartnerLink.created_at, PartnerLink.id)
                .all()
            )
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to list outgoing links for user {user_id}") from e

    def list_involving(self, user_id: int, status: PartnerStatus) -> List[PartnerLink]:
        """Links in either direction."""
        try:
            return (
                self._links()
                .filter(
                    or_(PartnerLink.user_id == user_id, PartnerLink.partner_id == user_id),
                    PartnerLink.status == status,
                )
                .order_by(PartnerLink.created_at, PartnerLink.id)
                .all()
            )
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to list links for user {user_id}") from e

    def inviter_ids_accepted_by(self, user_id: int) -> Set[int]:
        """Inviters whose invitation this user accepted."""
        try:
            rows = (
                self.db.query(PartnerLink.user_id)
                .filter(PartnerLink.partner_id == user_id, PartnerLink.status == PartnerStatus.ACCEPTED)
                .all()
            )
            return {row[0] for row in rows}
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to resolve partners of user {user_id}") from e

    def invitee_ids_accepted_from(self, user_id: int) -> Set[int]:
        """Invitees who accepted this user's invitation."""
        try:
            rows = (
                self.db.query(PartnerLink.partner_id)
                .filter(PartnerLink.user_id == user_id, PartnerLink.status == PartnerStatus.ACCEPTED)
                .all()
            )
            return {row[0] for row in rows}
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to resolve partners of user {user_id}") from e

    def find_open_link(self, inviter_id: int, invitee_id: int) -> Optional[PartnerLink]:
        """A pending or accepted link from inviter to invitee, if any."""
        try:
            return (
                self.db.query(PartnerLink)
                .filter(
                    PartnerLink.user_id == inviter_id,
                    PartnerLink.partner_id == invitee_id,
                    PartnerLink.status.in_([PartnerStatus.PENDING, PartnerStatus.ACCEPTED]),
                )
                .first()
            )
        except SQLAlchemyError as e:
            raise DatabaseException("Failed to look up existing partner link") from e
