"""
Comment and Reaction Pydantic Schemas
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from partner_calendar.schemas.user import UserPublic


class CreateCommentRequest(BaseModel):
    """Request schema for commenting on an event."""

    content: str
    parent_id: Optional[int] = None


class CommentResponse(BaseModel):
    """Response schema for a comment with its author's profile."""

    id: int
    event_id: int
    user_id: int
    content: str
    parent_id: Optional[int] = None
    created_at: datetime
    user: Optional[UserPublic] = None

    model_config = ConfigDict(from_attributes=True)


class CommentThreadResponse(BaseModel):
    """A top-level comment and its replies."""

    comment: CommentResponse
    replies: List[CommentResponse] = Field(default_factory=list)


class CreateReactionRequest(BaseModel):
    """Request schema for reacting to an event."""

    type: str = Field(..., max_length=50)


class ReactionResponse(BaseModel):
    """Response schema for a reaction."""

    id: int
    event_id: int
    user_id: int
    type: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
