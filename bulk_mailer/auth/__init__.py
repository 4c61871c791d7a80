"""Authentication module for the bulk mailer.

Contains the static credential store, the bearer token service and the
login operation.

Author: Odiseo
Created: 2025-10-18
Version: 1.0.0
"""

from bulk_mailer.auth.credentials import CredentialStore
from bulk_mailer.auth.service import AuthService
from bulk_mailer.auth.tokens import TokenService

__all__ = ["AuthService", "CredentialStore", "TokenService"]
