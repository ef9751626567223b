"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.
Supports three modes:
    - DEVELOPMENT: Uses the mock mail transport (nothing leaves the process)
    - STAGING / PRODUCTION: Sends real email through SendGrid

Mail credentials, database credentials and the listen port have no defaults.
If any of them is absent, building ``Settings`` fails and the process refuses
to start.

Usage:
    from cookhouse.core.config import get_settings

    settings = get_settings()
    if settings.is_development:
        # Mock mail transport
    else:
        # SendGrid

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
import sys
from enum import Enum
from typing import Optional
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class EnvironmentMode(str, Enum):
    """
    Application environment modes.

    Attributes:
        DEVELOPMENT: Local testing with the mock mail transport
        PRODUCTION: Live environment sending real email
        STAGING: Pre-production with real email delivery
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Sensitive values (mail key, database password) should NEVER be committed
    to version control.

    Attributes:
        env_mode: Current environment (development/production/staging)
        debug: Enable verbose logging

        # Mail (required)
        email_user: The service's own mailbox, used as sender
        email_pass: Mail provider credential (SendGrid API key)

        # Database (required)
        db_host, db_user, db_pass, db_name: Relational store coordinates

        # Server (required)
        port: Listen port
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================

    env_mode: EnvironmentMode = Field(
        default=EnvironmentMode.DEVELOPMENT,
        description="Application environment mode"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )

    # ==========================================================================
    # APPLICATION
    # ==========================================================================

    app_name: str = Field(
        default="Daddy's Cook House API",
        description="Application display name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    port: int = Field(
        ...,
        description="API server port"
    )

    # ==========================================================================
    # DATABASE
    # ==========================================================================

    db_host: str = Field(..., description="Database host")
    db_user: str = Field(..., description="Database user")
    db_pass: str = Field(..., description="Database password")
    db_name: str = Field(..., description="Database name")
    db_port: Optional[int] = Field(
        default=None,
        description="Database port (driver default when unset)"
    )
    db_driver: str = Field(
        default="postgresql+psycopg",
        description="SQLAlchemy async driver name"
    )
    database_url_override: Optional[str] = Field(
        default=None,
        alias="database_url",
        description="Full connection URL, replaces the DB_* coordinates"
    )
    db_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Upper bound for a single store call"
    )

    # ==========================================================================
    # MAIL
    # ==========================================================================

    email_user: str = Field(..., description="Sender mailbox")
    email_pass: str = Field(..., description="Mail provider API key")
    mail_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Upper bound for a single mail send"
    )
    orders_notify_email: str = Field(
        default="orders@daddyscookhouse.com",
        description="Operations mailbox that receives new order alerts"
    )
    mock_mail_failure_rate: float = Field(
        default=0.0,
        ge=0,
        le=1,
        description="Simulated failure rate of the mock mail transport"
    )

    # ==========================================================================
    # SECURITY
    # ==========================================================================

    bcrypt_rounds: int = Field(
        default=10,
        ge=4,
        le=31,
        description="bcrypt work factor"
    )

    # ==========================================================================
    # BUSINESS CONFIGURATION
    # ==========================================================================

    restaurant_name: str = Field(
        default="Daddy's Cook House",
        description="Restaurant display name used in emails"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("env_mode", mode="before")
    @classmethod
    def validate_env_mode(cls, v: str) -> EnvironmentMode:
        """Convert string to EnvironmentMode enum."""
        if isinstance(v, EnvironmentMode):
            return v
        try:
            return EnvironmentMode(v.lower())
        except ValueError:
            valid = [e.value for e in EnvironmentMode]
            raise ValueError(f"Invalid env_mode. Must be one of: {valid}")

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.env_mode == EnvironmentMode.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.env_mode == EnvironmentMode.PRODUCTION

    @property
    def use_real_services(self) -> bool:
        """Check if real email should be sent."""
        return self.env_mode in (EnvironmentMode.PRODUCTION, EnvironmentMode.STAGING)

    @property
    def database_url(self) -> str:
        """Connection URL built from the DB_* settings unless overridden."""
        if self.database_url_override:
            return self.database_url_override
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_pass,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        ).render_as_string(hide_password=False)

    # ==========================================================================
    # VALIDATION METHODS
    # ==========================================================================

    def validate_production_config(self) -> list[str]:
        """
        Validate settings that only matter when real email is sent.

        Returns:
            List of missing or suspicious configuration keys
        """
        missing = []

        if self.use_real_services:
            if not self.email_pass.startswith("SG."):
                missing.append("EMAIL_PASS (not a SendGrid API key)")
            if self.mock_mail_failure_rate:
                missing.append("MOCK_MAIL_FAILURE_RATE (ignored outside development)")

        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Raises:
        pydantic.ValidationError: If a required variable is missing

    Example:
        >>> settings = get_settings()
        >>> print(settings.env_mode)
        EnvironmentMode.DEVELOPMENT
    """
    return Settings()


def missing_settings(exc) -> list[str]:
    """Environment variable names reported missing by a settings ValidationError."""
    return [
        str(error["loc"][0]).upper()
        for error in exc.errors()
        if error["type"] == "missing"
    ]


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(debug: bool = False, level: int = logging.INFO) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        debug: Force DEBUG level
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured package logger
    """
    if debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-25s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return logging.getLogger("cookhouse")
