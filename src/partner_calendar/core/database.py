"""
Database connection and session management.

This module handles:
- Database engine creation with connection pooling
- Session factory setup
- Connection health checks
- Retry logic for database initialization
"""

import sqlite3
import time
import logging
from functools import lru_cache
from typing import Generator, Dict, Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker, Session

from partner_calendar.core.config import get_settings
from partner_calendar.core.exceptions import DatabaseException

logger = logging.getLogger('CORE_DATABASE')

# Backoff between connection attempts at startup, in seconds
RETRY_DELAYS = [1, 2, 3, 5, 8]


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _engine_options(url: str) -> Dict[str, Any]:
    settings = get_settings()
    options: Dict[str, Any] = {
        'pool_pre_ping': settings.db_pool_pre_ping,
        'echo': settings.db_echo,
    }
    if url.startswith("sqlite"):
        options['connect_args'] = {"check_same_thread": False}
    else:
        options.update({
            'pool_size': settings.db_pool_size,
            'max_overflow': settings.db_max_overflow,
            'pool_timeout': settings.db_pool_timeout,
            'pool_recycle': settings.db_pool_recycle,
        })
    return options


@lru_cache()
def get_engine() -> Engine:
    """
    Create the shared engine, retrying while the database comes up.

    Returns:
        Engine: SQLAlchemy engine bound to the configured database

    Raises:
        DatabaseException: If no connection could be made after all retries
    """
    settings = get_settings()
    url = settings.get_database_url()
    logger.info(f"Initializing database connection to: {settings.describe_database()}")

    for attempt, delay in enumerate(RETRY_DELAYS, start=1):
        engine = create_engine(url, **_engine_options(url))
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info(f"Database connection established on attempt {attempt}")
            return engine
        except OperationalError as e:
            engine.dispose()
            logger.error(f"Database not ready (attempt {attempt}/{len(RETRY_DELAYS)}): {e}")
            if attempt < len(RETRY_DELAYS):
                logger.info(f"Retrying in {delay} seconds...")
                time.sleep(delay)
            else:
                raise DatabaseException(
                    f"Could not connect to the database after {len(RETRY_DELAYS)} attempts"
                ) from e


@lru_cache()
def get_session_factory() -> sessionmaker:
    """Session factory bound to the shared engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get database session.

    Yields:
        Session: SQLAlchemy database session

    Example:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return db.query(Item).all()
    """
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def get_database_health() -> Dict[str, Any]:
    """
    Check database connection health and return status.

    Returns:
        dict: Health status with connection pool information
    """
    settings = get_settings()
    try:
        engine = get_engine()
        with engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        return {
            "status": "healthy",
            "connection_pool": engine.pool.status(),
            "database": settings.describe_database(),
        }
    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e),
        }


def init_db() -> None:
    """
    Create all tables if they do not exist yet.

    Safe to call on every startup.
    """
    from partner_calendar.models import Base

    try:
        Base.metadata.create_all(bind=get_engine())
        logger.info("Database tables ensured")
    except Exception as e:
        logger.error(f"Error during database initialization: {e}")
        raise
