"""
Base repository with generic CRUD operations.

This module provides a generic BaseRepository class that implements
common database operations for any SQLAlchemy model. Repositories never
commit: they add, flush and delete inside the caller's transaction, and
the UnitOfWork decides when the whole operation commits.
"""

from typing import Generic, TypeVar, Type, List, Optional, Dict, Any, Iterable
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from partner_calendar.models.base import Base
from partner_calendar.core.exceptions import NotFoundException, DatabaseException, ConflictException


# Generic type bound to SQLAlchemy Base
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository with CRUD operations.

    Type Parameters:
        ModelType: The SQLAlchemy model type this repository manages

    Example:
        class UserRepository(BaseRepository[User]):
            def __init__(self, db: Session):
                super().__init__(User, db)

            def get_by_email(self, email: str) -> Optional[User]:
                return self.db.query(self.model).filter(
                    self.model.email == email
                ).first()
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize the repository.

        Args:
            model: The SQLAlchemy model class
            db: SQLAlchemy database session
        """
        self.model = model
        self.db = db

    def get(self, id: int) -> Optional[ModelType]:
        """
        Get a single record by ID.

        Args:
            id: Primary key value

        Returns:
            Model instance or None if not found
        """
        try:
            return self.db.query(self.model).filter(self.model.id == id).first()
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to get {self.model.__name__} with id {id}") from e

    def get_or_fail(self, id: int) -> ModelType:
        """
        Get a single record by ID or raise exception.

        Raises:
            NotFoundException: If record not found
        """
        obj = self.get(id)
        if obj is None:
            raise NotFoundException(self.model.__name__, id)
        return obj

    def get_for_update(self, id: int) -> Optional[ModelType]:
        """
        Get a record by ID and lock its row until the transaction ends.

        Backends without row locks (SQLite) ignore the lock.
        """
        try:
            return (
                self.db.query(self.model)
                .filter(self.model.id == id)
                .with_for_update()
                .first()
            )
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to lock {self.model.__name__} with id {id}") from e

    def get_by_filter(self, filters: Dict[str, Any]) -> List[ModelType]:
        """
        Get records matching equality filters, ordered by primary key.

        Args:
            filters: Dictionary of field names and values to filter by

        Returns:
            List of model instances matching filters
        """
        try:
            query = self.db.query(self.model)
            for key, value in filters.items():
                if hasattr(self.model, key):
                    query = query.filter(getattr(self.model, key) == value)
            return query.order_by(self.model.id).all()
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to filter {self.model.__name__}") from e

    def add(self, obj: ModelType) -> ModelType:
        """
        Stage a new record and flush it so its ID is populated.

        Raises:
            ConflictException: If a unique constraint is violated
        """
        try:
            self.db.add(obj)
            self.db.flush()
            return obj
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictException(self.model.__name__, "constraint", str(e.orig)) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseException(f"Failed to create {self.model.__name__}") from e

    def add_from_dict(self, data: Dict[str, Any]) -> ModelType:
        """Build a model instance from a dictionary and stage it."""
        return self.add(self.model(**data))

    def update_fields(self, obj: ModelType, data: Dict[str, Any]) -> ModelType:
        """
        Apply a partial update to an existing record.

        Args:
            obj: Model instance to update
            data: Dictionary of fields to update

        Returns:
            Updated model instance
        """
        for key, value in data.items():
            if hasattr(obj, key):
                setattr(obj, key, value)
        try:
            self.db.flush()
            return obj
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseException(f"Failed to update {self.model.__name__}") from e

    def delete(self, obj: ModelType) -> bool:
        """
        Delete a record.

        Args:
            obj: Model instance to delete

        Returns:
            True if successful
        """
        try:
            self.db.delete(obj)
            self.db.flush()
            return True
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseException(f"Failed to delete {self.model.__name__}") from e

    def exists(self, id: int) -> bool:
        """
        Check if a record exists.

        Args:
            id: Primary key value

        Returns:
            True if exists, False otherwise
        """
        try:
            return self.db.query(self.model.id).filter(self.model.id == id).first() is not None
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to check existence of {self.model.__name__}") from e

    def _insert_statement(self):
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(self.model.__table__)
        if dialect == "sqlite":
            return sqlite.insert(self.model.__table__)
        raise DatabaseException(f"Upsert is not supported on {dialect}")

    def upsert_row(
        self,
        values: Dict[str, Any],
        conflict_columns: Iterable[str],
        update_columns: Iterable[str] = (),
    ) -> bool:
        """
        Insert a row and let the database resolve a clash on conflict_columns.

        With update_columns the existing row takes the new values (last
        writer wins); without them the existing row is kept.

        Args:
            values: Column values of the new row
            conflict_columns: Columns of the unique constraint
            update_columns: Columns overwritten on conflict

        Returns:
            True if a row was inserted or updated, False if one was kept
        """
        stmt = self._insert_statement().values(**values)
        update_columns = list(update_columns)
        if update_columns:
            stmt = stmt.on_conflict_do_update(
                index_elements=list(conflict_columns),
                set_={column: stmt.excluded[column] for column in update_columns},
            )
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=list(conflict_columns))
        try:
            return self.db.execute(stmt).rowcount > 0
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseException(f"Failed to upsert {self.model.__name__}") from e
