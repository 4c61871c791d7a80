"""Models module for the bulk mailer.

Defines Pydantic v2 data models for authentication, bulk send requests and
results, SMTP sessions, and server information.

Author: Odiseo
Created: 2025-10-18
Version: 1.0.0
"""

from bulk_mailer.models.auth import LoginResult, TokenClaims
from bulk_mailer.models.email import OutboundMessage, SendEmailRequest, SendEmailResult
from bulk_mailer.models.server_info import NetworkInterface, ServerInfo, ServerUrls
from bulk_mailer.models.smtp_config import SMTPConfig

__all__ = [
    # Auth
    "TokenClaims",
    "LoginResult",
    # Email
    "SendEmailRequest",
    "OutboundMessage",
    "SendEmailResult",
    # SMTP
    "SMTPConfig",
    # Server info
    "NetworkInterface",
    "ServerUrls",
    "ServerInfo",
]
