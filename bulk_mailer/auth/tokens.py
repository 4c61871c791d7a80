"""Bearer token issuing and verification.

Wraps ``python-jose`` to sign a compact claim set ``{username, iat, exp}``
and to verify it on protected calls. Tokens are stateless: nothing is
stored server-side and they become invalid only when they expire.

Author: Odiseo
Created: 2025-10-18
Version: 1.0.0
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from bulk_mailer.core.exceptions import InvalidTokenError, NoTokenError
from bulk_mailer.core.logger import get_logger
from bulk_mailer.models.auth import TokenClaims

logger = get_logger(__name__)


class TokenService:
    """Issues and verifies signed bearer tokens.

    Attributes:
        algorithm: JWS algorithm used for signing.
        lifetime: How long an issued token stays valid.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expire_hours: int = 24) -> None:
        """Initialize the token service.

        Args:
            secret: Process-wide signing key.
            algorithm: JWS algorithm (HS256 by default).
            expire_hours: Token lifetime in hours.
        """
        self._secret = secret
        self.algorithm = algorithm
        self.lifetime = timedelta(hours=expire_hours)

    def issue(self, username: str, now: datetime | None = None) -> str:
        """Mint a signed token for ``username``.

        Args:
            username: Authenticated username to embed.
            now: Issue instant; defaults to the current UTC time.

        Returns:
            Compact JWS string.
        """
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "username": username,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> TokenClaims:
        """Verify signature and expiry, and return the claim set.

        Raises:
            InvalidTokenError: If the token is malformed, tampered with,
                expired, or lacks a username.
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except JWTError as exc:
            logger.warning(f"Token rejected: {exc}")
            raise InvalidTokenError() from exc

        username = payload.get("username")
        expires = payload.get("exp")
        if not isinstance(username, str) or not username or expires is None:
            logger.warning("Token rejected: missing username or exp claim")
            raise InvalidTokenError()

        return TokenClaims(
            username=username,
            issued_at=datetime.fromtimestamp(payload.get("iat", 0), tz=timezone.utc),
            expires_at=datetime.fromtimestamp(expires, tz=timezone.utc),
        )

    def verify_header(self, authorization: str | None) -> TokenClaims:
        """Verify an ``Authorization: Bearer <token>`` header value.

        Raises:
            NoTokenError: If the header or its token segment is missing.
            InvalidTokenError: If the token does not verify.
        """
        token = self.extract_token(authorization)
        if token is None:
            raise NoTokenError()
        return self.decode(token)

    @staticmethod
    def extract_token(authorization: str | None) -> str | None:
        """Return the second whitespace-separated segment of the header."""
        if not authorization:
            return None
        parts = authorization.split()
        if len(parts) < 2:
            return None
        return parts[1]
