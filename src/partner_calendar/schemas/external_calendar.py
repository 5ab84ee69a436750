"""
External Calendar Pydantic Schemas
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateExternalCalendarRequest(BaseModel):
    """Request schema for linking an external calendar."""

    provider: str = Field(..., min_length=1, max_length=50, description="google, apple, or outlook")
    external_id: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    color: Optional[str] = Field(None, max_length=32)
    sync_enabled: bool = True


class ExternalCalendarResponse(CreateExternalCalendarRequest):
    """Response schema for a linked external calendar."""

    id: int
    user_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
