"""Authentication data models.

Defines the decoded token claim set and the login result returned to
callers.

Author: Odiseo
Created: 2025-10-18
Version: 1.0.0
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from bulk_mailer.models.base import CamelModel


class TokenClaims(CamelModel):
    """Claim set embedded in a bearer token.

    Attributes:
        username: Authenticated username.
        issued_at: When the token was minted (``iat``).
        expires_at: When the token stops verifying (``exp``).
    """

    username: str = Field(..., min_length=1, description="Authenticated username")
    issued_at: datetime = Field(..., description="Token issue time")
    expires_at: datetime = Field(..., description="Token expiry time")


class LoginResult(CamelModel):
    """Successful login payload."""

    token: str = Field(..., description="Signed bearer token")
    username: str = Field(..., description="Authenticated username")
    expires_in: str = Field(default="24h", description="Token lifetime label")
    token_type: str = Field(default="Bearer", description="Token type")
