"""Login operation.

Author: Odiseo
Created: 2025-10-18
Version: 1.0.0
"""

from __future__ import annotations

from typing import Any

from bulk_mailer.auth.credentials import CredentialStore
from bulk_mailer.auth.tokens import TokenService
from bulk_mailer.core.exceptions import AuthenticationError
from bulk_mailer.core.logger import get_logger, log_context
from bulk_mailer.models.auth import LoginResult

logger = get_logger(__name__)


class AuthService:
    """Exchanges a username/password pair for a bearer token."""

    def __init__(
        self,
        store: CredentialStore,
        tokens: TokenService,
        expires_in: str = "24h",
    ) -> None:
        self.store = store
        self.tokens = tokens
        self.expires_in = expires_in

    def login(self, username: Any, password: Any) -> LoginResult:
        """Authenticate and issue a token.

        Args:
            username: Supplied username.
            password: Supplied password.

        Returns:
            Token plus the echoed username, lifetime label and token type.

        Raises:
            AuthenticationError: If the pair does not match a known user.
        """
        if not self.store.authenticate(username, password):
            logger.warning(f"Login failed: {log_context('login', user=str(username))}")
            raise AuthenticationError()

        token = self.tokens.issue(username)
        logger.info(f"Login succeeded: {log_context('login', user=username)}")

        return LoginResult(
            token=token,
            username=username,
            expires_in=self.expires_in,
            token_type="Bearer",
        )
