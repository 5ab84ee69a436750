"""
User Service

Registration and lookup of user profiles. Credentials are handled by the
external auth provider.
"""

from typing import Any, Mapping, Optional, Union

from sqlalchemy.orm import Session

from partner_calendar.core.config import Settings
from partner_calendar.core.exceptions import NotFoundException
from partner_calendar.models import User
from partner_calendar.schemas.user import CreateUserRequest
from partner_calendar.services.base_service import BaseService


class UserService(BaseService):

    def __init__(self, db: Session, settings: Optional[Settings] = None):
        super().__init__(db, settings, service_name="USER_SERVICE")

    def register_user(self, data: Union[CreateUserRequest, Mapping[str, Any]]) -> User:
        """
        Raises:
            ValidationException: Missing or invalid fields
            ConflictException: Username or email already registered
        """
        parsed = self.parse(CreateUserRequest, data)
        with self.uow() as uow:
            user = uow.users.create_user(parsed.model_dump())
            uow.commit()
        self.logger.info(f"User {user.id} registered ({user.username})")
        return user

    def get_user(self, user_id: int) -> User:
        return self.uow().users.get_or_fail(user_id)

    def get_user_by_email(self, email: str) -> User:
        user = self.uow().users.get_by_email(email.strip())
        if user is None:
            raise NotFoundException("User", email)
        return user
