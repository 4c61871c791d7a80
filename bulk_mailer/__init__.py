"""Bulk Mailer - Authenticated bulk email relay over SMTP.

Provides a small HTTP service with:
- Username/password login exchanged for a 24-hour bearer token
- Bulk send of one HTML email to up to 25 recipients via BCC
- Sender credentials used per request and never stored
- Health and server network information endpoints

Architecture:
    - FastAPI application (api)
    - Static credential store and JWT token service (auth)
    - SMTP client and network inspector (clients)
    - Payload validation, send orchestration, server info (services)

Modules:
    - core: Exceptions, logger
    - config: Pydantic v2 settings
    - models: Data models (requests, results, claims, server info)
    - auth: Credentials, tokens, login
    - clients: External integrations (SMTP, OS network interfaces)
    - services: Validation, bulk sending, server info
    - api: HTTP endpoints
    - scripts: Operator tooling

Usage:
    # Run the API server
    python -m bulk_mailer

    # Check a sender's SMTP credentials
    python -m bulk_mailer.scripts.verify_smtp --email me@gmail.com

Author: Odiseo
Created: 2025-10-18
Version: 1.0.0
"""

__version__ = "1.0.0"

# Authentication
from bulk_mailer.auth import AuthService, CredentialStore, TokenService

# Clients
from bulk_mailer.clients import NetworkInspector, SMTPClient

# Configuration
from bulk_mailer.config import BccPolicy, MailerConfig

# Core utilities
from bulk_mailer.core import (
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
    get_logger,
)

# Models
from bulk_mailer.models import (
    LoginResult,
    NetworkInterface,
    OutboundMessage,
    SendEmailRequest,
    SendEmailResult,
    ServerInfo,
    ServerUrls,
    SMTPConfig,
    TokenClaims,
)

# Services
from bulk_mailer.services import (
    BulkMailer,
    ServerInfoReporter,
    is_valid_email,
    validate_send_request,
)

__all__ = [
    # Version
    "__version__",
    # Core exceptions
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
    "get_logger",
    # Configuration
    "MailerConfig",
    "BccPolicy",
    # Models
    "TokenClaims",
    "LoginResult",
    "SendEmailRequest",
    "OutboundMessage",
    "SendEmailResult",
    "SMTPConfig",
    "NetworkInterface",
    "ServerUrls",
    "ServerInfo",
    # Authentication
    "CredentialStore",
    "TokenService",
    "AuthService",
    # Clients
    "SMTPClient",
    "NetworkInspector",
    # Services
    "BulkMailer",
    "ServerInfoReporter",
    "is_valid_email",
    "validate_send_request",
]
