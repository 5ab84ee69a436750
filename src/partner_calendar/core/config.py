"""
Application configuration management using Pydantic Settings.

This module centralizes all environment-based configuration for the application,
providing type-safe access to configuration values with validation.
"""

import os
from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache
import logging

logger = logging.getLogger('CORE_CONFIG')


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Name of the application
        debug: Debug mode flag
        log_level: Root log level applied at startup

        # Database Configuration
        db_username: PostgreSQL username
        db_password: PostgreSQL password
        db_host: PostgreSQL host
        db_endpoint: AWS RDS endpoint (alternative to db_host)
        db_port: PostgreSQL port
        db_name: PostgreSQL database name
        database_url: Complete database URL (if provided directly)

        # Connection Pool Settings
        db_pool_size: Database connection pool size
        db_max_overflow: Maximum overflow connections
        db_pool_timeout: Pool checkout timeout in seconds
        db_pool_recycle: Connection recycle time in seconds

        # Identity
        user_id_header: Header carrying the authenticated user id

        # Sharing policy
        symmetric_partners: Accepted links make both users partners
        reject_duplicate_invitations: Refuse a second invite to the same user
        strict_participant_permissions: Reject unknown grant permissions
    """

    # Application Settings
    app_name: str = "Partner Calendar"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Database Configuration
    db_username: str = "postgres"
    db_password: Optional[str] = None
    db_host: Optional[str] = None
    db_endpoint: Optional[str] = None  # AWS RDS style
    db_port: str = "5432"
    db_name: Optional[str] = None
    database_url: Optional[str] = None

    # Connection Pool Settings
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_pool_timeout: int = 10
    db_pool_recycle: int = 3600
    db_pool_pre_ping: bool = True
    db_echo: bool = False

    # Identity supplied by the upstream auth provider
    user_id_header: str = "X-User-Id"

    # Sharing policy
    symmetric_partners: bool = False
    reject_duplicate_invitations: bool = False
    strict_participant_permissions: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    def get_database_host(self) -> str:
        """
        Get database host, parsing DB_ENDPOINT if necessary.

        Returns:
            str: Database host address

        Raises:
            ValueError: If no host configuration is found
        """
        if self.db_endpoint:
            if ':' in self.db_endpoint:
                host, port = self.db_endpoint.rsplit(':', 1)
                try:
                    int(port)
                except ValueError:
                    return self.db_endpoint
                # Explicit DB_PORT wins over the endpoint suffix
                if not os.getenv("DB_PORT"):
                    self.db_port = port
                return host
            return self.db_endpoint

        if self.db_host:
            return self.db_host

        raise ValueError("Database host configuration missing (DB_HOST or DB_ENDPOINT)")

    def get_database_url(self) -> str:
        """
        Construct the database URL from components or return direct URL.

        Returns:
            str: Database URL

        Raises:
            ValueError: If required configuration is missing
        """
        if self.database_url:
            return self.database_url

        missing = []
        if not self.db_username:
            missing.append("DB_USERNAME")
        if not self.db_password:
            missing.append("DB_PASSWORD")
        if not self.db_name:
            missing.append("DB_NAME")

        try:
            db_host = self.get_database_host()
        except ValueError:
            missing.append("DB_HOST or DB_ENDPOINT")
            db_host = None

        if missing:
            raise ValueError(f"Database configuration incomplete. Missing: {', '.join(missing)}")

        return f"postgresql://{self.db_username}:{self.db_password}@{db_host}:{self.db_port}/{self.db_name}"

    def describe_database(self) -> str:
        """Database location with the password masked, for logs."""
        if self.database_url:
            scheme, _, rest = self.database_url.partition("://")
            if "@" in rest:
                rest = rest.split("@", 1)[1]
                return f"{scheme}://***@{rest}"
            return self.database_url
        return f"postgresql://{self.db_username}:***@{self.get_database_host()}:{self.db_port}/{self.db_name}"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Cached settings object
    """
    return Settings()
