"""
Partner link ORM model.

A directed edge from the inviter (user_id) to the invitee (partner_id).
"""

from sqlalchemy import Boolean, Column, Enum, ForeignKey, Index, Integer
from sqlalchemy.orm import relationship

from partner_calendar.models.base import Base, CreatedAtMixin
from partner_calendar.models.enums import PartnerStatus


class PartnerLink(CreatedAtMixin, Base):
    """
    Partner invitation and its outcome.

    Attributes:
        id: Primary key
        user_id: Inviter
        partner_id: Invitee, the only user allowed to answer
        status: pending, then accepted or rejected
        share_all: Inviter shares every partner-level event
        share_raft_only: Inviter shares only a subset (descriptive)
    """

    __tablename__ = "partners"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    partner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    status = Column(
        Enum(
            PartnerStatus,
            name="partner_status",
            values_callable=lambda enum_cls: [m.value for m in enum_cls],
        ),
        nullable=False,
        default=PartnerStatus.PENDING,
    )
    share_all = Column(Boolean, nullable=False, default=True)
    share_raft_only = Column(Boolean, nullable=False, default=False)

    inviter = relationship("User", foreign_keys=[user_id])
    invitee = relationship("User", foreign_keys=[partner_id])


Index("idx_partners_user_status", PartnerLink.user_id, PartnerLink.status)
Index("idx_partners_partner_status", PartnerLink.partner_id, PartnerLink.status)
