"""
User Pydantic Schemas
"""

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime


class UserBase(BaseModel):
    """Base user fields."""

    username: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255)
    full_name: str = Field(..., min_length=1, max_length=255)
    avatar: Optional[str] = None


class CreateUserRequest(UserBase):
    """Request schema for registering a user."""


class UserPublic(UserBase):
    """Public profile projection shared with other users."""

    id: int

    model_config = ConfigDict(from_attributes=True)


class UserResponse(UserPublic):
    """Response schema for a user."""

    created_at: datetime
