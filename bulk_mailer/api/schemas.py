"""API request and response schemas.

Every response uses the envelope ``{success, message, data?, error?}``;
``None`` members are left out of the JSON.

Version: 1.0.0
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from bulk_mailer.models.auth import LoginResult
from bulk_mailer.models.base import CamelModel, utc_now
from bulk_mailer.models.email import SendEmailResult
from bulk_mailer.models.server_info import ServerInfo


class LoginRequest(BaseModel):
    """Request model for POST /api/login.

    Fields are untyped so a missing or non-string value is reported as bad
    credentials rather than as a schema error.
    """

    username: Any = Field(default=None, description="Username")
    password: Any = Field(default=None, description="Password")


class ApiResponse(CamelModel):
    """Base response envelope."""

    success: bool = Field(description="Whether the request succeeded")
    message: str = Field(description="Human-readable outcome")


class ErrorResponse(ApiResponse):
    """Standard error envelope."""

    success: bool = False
    error: str | None = Field(default=None, description="Error code or detail")


class LoginResponse(ApiResponse):
    """Response model for POST /api/login."""

    data: LoginResult


class SendEmailResponse(ApiResponse):
    """Response model for POST /api/send-email."""

    data: SendEmailResult


class ServerInfoResponse(ApiResponse):
    """Response model for GET /api/server-info."""

    data: ServerInfo


class HealthResponse(ApiResponse):
    """Response model for GET /api/health."""

    timestamp: datetime = Field(default_factory=utc_now)
