"""
Base Service Class

Provides common functionality and patterns for the core services:
logging, settings, unit-of-work creation and conversion of pydantic
validation failures into ValidationException.
"""

import logging
from typing import Any, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from partner_calendar.core.config import Settings, get_settings
from partner_calendar.core.exceptions import ValidationException
from partner_calendar.repositories import UnitOfWork
from partner_calendar.schemas.common import error_map

SchemaType = TypeVar("SchemaType", bound=BaseModel)


class BaseService:
    """
    Base class for all service implementations.

    Provides:
    - Standardized logging
    - Access to application settings
    - A UnitOfWork over the injected session
    - Schema parsing with field-level error reporting
    """

    def __init__(self, db: Session, settings: Optional[Settings] = None, service_name: Optional[str] = None):
        """
        Initialize base service.

        Args:
            db: Database session shared by every repository call
            settings: Application settings (defaults to the cached settings)
            service_name: Service name for logging (defaults to class name)
        """
        self.db = db
        self.settings = settings or get_settings()
        self.service_name = service_name or self.__class__.__name__
        self.logger = logging.getLogger(self.service_name)

    def uow(self) -> UnitOfWork:
        """Unit of Work bound to this service's session."""
        return UnitOfWork(self.db)

    @staticmethod
    def parse(schema: Type[SchemaType], data: Union[SchemaType, Mapping[str, Any]]) -> SchemaType:
        """
        Validate caller data against a schema.

        Raises:
            ValidationException: Listing every invalid field
        """
        if isinstance(data, schema):
            return data
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=True)
        try:
            return schema.model_validate(data)
        except ValidationError as e:
            raise ValidationException(
                f"Invalid {schema.__name__} data",
                error_map(e.errors()),
            ) from e
