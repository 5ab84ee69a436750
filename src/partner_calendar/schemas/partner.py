"""
Partner Pydantic Schemas
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from partner_calendar.models.enums import PartnerStatus
from partner_calendar.schemas.user import UserPublic


class InvitePartnerRequest(BaseModel):
    """Request schema for inviting a partner by email."""

    partner_email: str = Field(..., min_length=3, max_length=255)
    share_all: bool = True
    share_raft_only: bool = False


class PartnerStatusUpdateRequest(BaseModel):
    """Request schema for answering a partner request."""

    status: str


class PartnerLinkResponse(BaseModel):
    """Response schema for a partner link."""

    id: int
    user_id: int
    partner_id: int
    status: PartnerStatus
    share_all: bool
    share_raft_only: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PartnerLinkWithUserResponse(PartnerLinkResponse):
    """Partner link joined with the other user's public profile."""

    counterpart: UserPublic
