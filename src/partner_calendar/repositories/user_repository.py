"""
User Repository

Data access layer for user records.
"""

from typing import Optional
from sqlalchemy.orm import Session

from partner_calendar.models.user import User
from partner_calendar.repositories.base import BaseRepository
from partner_calendar.core.exceptions import ConflictException


class UserRepository(BaseRepository[User]):
    """Repository for user records."""

    def __init__(self, db: Session):
        super().__init__(User, db)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def create_user(self, user_data: dict) -> User:
        if self.get_by_username(user_data.get("username")):
            raise ConflictException("User", "username", user_data.get("username"))
        if self.get_by_email(user_data.get("email")):
            raise ConflictException("User", "email", user_data.get("email"))
        return self.add_from_dict(user_data)
