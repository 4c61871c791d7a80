"""Core module for the bulk mailer.

Provides foundational utilities, exceptions, and logging configuration.

Author: Odiseo
Created: 2025-10-18
Version: 1.0.0
"""

from bulk_mailer.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    InvalidTokenError,
    MailerError,
    NoTokenError,
    ServerInfoError,
    TransportAuthError,
    TransportConnectionError,
    TransportError,
    ValidationError,
)
from bulk_mailer.core.logger import (
    get_logger,
    log_context,
    setup_logging,
)

__all__ = [
    # Exceptions
    "MailerError",
    "AuthenticationError",
    "AuthorizationError",
    "NoTokenError",
    "InvalidTokenError",
    "ValidationError",
    "TransportError",
    "TransportAuthError",
    "TransportConnectionError",
    "ServerInfoError",
    # Logging
    "get_logger",
    "setup_logging",
    "log_context",
]
