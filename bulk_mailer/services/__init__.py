"""Services module for the bulk mailer.

Contains request validation, bulk send orchestration and server
information reporting.

Author: Odiseo
Created: 2025-10-18
Version: 1.0.0
"""

from bulk_mailer.services.mailer import BulkMailer
from bulk_mailer.services.server_info import ServerInfoReporter
from bulk_mailer.services.validator import is_valid_email, validate_send_request

__all__ = [
    "BulkMailer",
    "ServerInfoReporter",
    "is_valid_email",
    "validate_send_request",
]
