"""Bulk mailer configuration with Pydantic v2.

Manages API, authentication, SMTP relay and logging settings loaded from
environment variables or .env file.

All settings can be overridden via environment variables.

Author: Odiseo
Created: 2025-10-18
Version: 1.0.0
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "bulk-mailer-insecure-default-secret"

DEFAULT_AUTH_USERS = {
    "admin": "admin123",
    "user": "user123",
    "demo": "demo123",
}


class BccPolicy(str, Enum):
    """How recipients are addressed on the outbound message.

    Attributes:
        BCC_ALL: No To header; every recipient receives a blind copy.
        SENDER_TO: The sender is the visible To; every recipient is BCC.
        FIRST_TO: The first recipient is the visible To; the rest are BCC.
    """

    BCC_ALL = "bcc_all"
    SENDER_TO = "sender_to"
    FIRST_TO = "first_to"


class MailerConfig(BaseSettings):
    """Bulk mailer configuration.

    Loads settings from environment variables and .env file using Pydantic v2.
    All settings are case-sensitive and strictly validated.

    Attributes:
        SERVICE_NAME: Name of the service.
        SERVICE_VERSION: Service version.
        API_HOST: Bind address for the HTTP server.
        PORT: HTTP port, also reported in server-info URLs.
        ENVIRONMENT: Deployment mode (informational only).
        JWT_SECRET: Token signing key.
        JWT_ALGORITHM: Token signing algorithm.
        TOKEN_EXPIRE_HOURS: Token lifetime in hours.
        AUTH_USERS: Static username to password table.
        SMTP_HOST: SMTP relay hostname.
        SMTP_PORT: SMTP relay port (1-65535).
        SMTP_USE_TLS: Whether to upgrade the connection with STARTTLS.
        SMTP_TIMEOUT: Socket timeout in seconds.
        SEND_TIMEOUT: Upper bound in seconds for one verify+send exchange.
        MAX_RECIPIENTS: Maximum recipients per request.
        BCC_POLICY: Recipient addressing policy.
        EXPOSE_ERROR_DETAILS: Attach raw transport errors to 500 responses.
        CORS_ORIGINS: Allowed CORS origins.
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        LOG_TO_FILE: Whether to log to file.
        LOG_DIR: Directory for log files.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ========================================================================
    # Service Configuration
    # ========================================================================
    SERVICE_NAME: str = Field(
        default="bulk-mailer",
        description="Name of the service",
    )
    SERVICE_VERSION: str = Field(
        default="1.0.0",
        description="Service version",
    )
    API_HOST: str = Field(
        default="0.0.0.0",
        description="API server host",
    )
    PORT: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="API server port",
    )
    ENVIRONMENT: str = Field(
        default="development",
        description="Deployment mode (informational)",
    )
    CORS_ORIGINS: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Allowed CORS origins",
    )

    # ========================================================================
    # Authentication Configuration
    # ========================================================================
    JWT_SECRET: str = Field(
        default=DEFAULT_JWT_SECRET,
        description="Token signing secret",
    )
    JWT_ALGORITHM: str = Field(
        default="HS256",
        description="Token signing algorithm",
    )
    TOKEN_EXPIRE_HOURS: int = Field(
        default=24,
        ge=1,
        le=720,
        description="Token lifetime in hours",
    )
    AUTH_USERS: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_AUTH_USERS),
        description="Static username/password table",
    )

    # ========================================================================
    # SMTP Configuration
    # ========================================================================
    SMTP_HOST: str = Field(
        default="smtp.gmail.com",
        description="SMTP server hostname",
    )
    SMTP_PORT: int = Field(
        default=587,
        ge=1,
        le=65535,
        description="SMTP server port",
    )
    SMTP_USE_TLS: bool = Field(
        default=True,
        description="Whether to use TLS encryption",
    )
    SMTP_TIMEOUT: int = Field(
        default=30,
        ge=5,
        le=300,
        description="SMTP connection timeout in seconds",
    )
    SEND_TIMEOUT: float = Field(
        default=60.0,
        gt=0,
        le=600,
        description="Upper bound for one verify+send exchange in seconds",
    )

    # ========================================================================
    # Bulk Send Configuration
    # ========================================================================
    MAX_RECIPIENTS: int = Field(
        default=25,
        ge=1,
        le=500,
        description="Maximum recipients per request",
    )
    BCC_POLICY: BccPolicy = Field(
        default=BccPolicy.BCC_ALL,
        description="Recipient addressing policy",
    )
    EXPOSE_ERROR_DETAILS: bool = Field(
        default=False,
        description="Return raw transport error text to API clients",
    )

    # ========================================================================
    # Logging Configuration
    # ========================================================================
    LOG_LEVEL: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level",
    )
    LOG_TO_FILE: bool = Field(
        default=True,
        description="Whether to log to file",
    )
    LOG_DIR: str = Field(
        default="./logs",
        description="Directory for log files",
    )
    LOG_MAX_SIZE_MB: int = Field(
        default=10,
        gt=0,
        description="Maximum log file size in megabytes",
    )
    LOG_BACKUP_COUNT: int = Field(
        default=5,
        gt=0,
        description="Number of backup log files to keep",
    )

    @field_validator("SMTP_HOST")
    @classmethod
    def validate_smtp_host(cls, v: str) -> str:
        """Validate SMTP host is not empty.

        Args:
            v: SMTP hostname to validate.

        Returns:
            Validated SMTP hostname.

        Raises:
            ValueError: If hostname is empty or whitespace.
        """
        if not v.strip():
            raise ValueError("SMTP_HOST cannot be empty")
        return v.strip()

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        """Reject an empty signing secret.

        Raises:
            ValueError: If the secret is empty or whitespace.
        """
        if not v or not v.strip():
            raise ValueError("JWT_SECRET cannot be empty")
        return v

    @field_validator("AUTH_USERS")
    @classmethod
    def validate_auth_users(cls, v: dict[str, str]) -> dict[str, str]:
        """Validate the credential table has at least one entry."""
        if not v:
            raise ValueError("AUTH_USERS must contain at least one user")
        return v

    @property
    def uses_default_secret(self) -> bool:
        """Whether the built-in fallback signing secret is in use."""
        return self.JWT_SECRET == DEFAULT_JWT_SECRET

    @property
    def token_expires_in(self) -> str:
        """Human-readable token lifetime label, e.g. ``"24h"``."""
        return f"{self.TOKEN_EXPIRE_HOURS}h"

    def get_smtp_config(self, username: str, password: str) -> dict[str, str | int | bool]:
        """Get SMTP configuration for one sender as dictionary.

        Combines the relay settings with the credentials supplied by the
        caller for a single delivery.

        Args:
            username: Sender address used to authenticate.
            password: App-specific password for the sender.

        Returns:
            Dictionary with SMTP configuration keys and values.
        """
        return {
            "host": self.SMTP_HOST,
            "port": self.SMTP_PORT,
            "username": username,
            "password": password,
            "use_tls": self.SMTP_USE_TLS,
            "timeout": self.SMTP_TIMEOUT,
        }
