"""Bulk email data models.

Defines the validated send request, the message handed to the SMTP
transport and the result returned after a successful delivery.

Author: Odiseo
Created: 2025-10-18
Version: 1.0.0
"""

from __future__ import annotations

from datetime import datetime
from email.utils import formataddr

from pydantic import Field, SecretStr

from bulk_mailer.models.base import CamelModel, utc_now


class SendEmailRequest(CamelModel):
    """Validated bulk send request.

    Built by ``validate_send_request`` only after every rule passed, so the
    model itself carries no validators. The app password is wrapped in
    ``SecretStr`` and never shows up in reprs or logs.

    Attributes:
        sender_email: Address used both as From and SMTP login.
        sender_name: Display name for the From header.
        app_password: App-specific password for the sender's mailbox.
        recipients: Ordered recipient addresses (duplicates allowed).
        subject: Subject line, passed through unmodified.
        template: HTML body, passed through unmodified.
    """

    sender_email: str
    sender_name: str
    app_password: SecretStr
    recipients: list[str]
    subject: str
    template: str

    @property
    def from_header(self) -> str:
        """Display-from value, ``"<name> <address>"``, quoted or encoded as needed."""
        return formataddr((self.sender_name, self.sender_email))


class OutboundMessage(CamelModel):
    """Message ready for the transport after the recipient policy is applied.

    Attributes:
        from_header: Display From value.
        sender_email: Envelope sender.
        to: Visible To addresses (may be empty).
        bcc: Blind copy addresses (never written as a header).
        subject: Subject line.
        html: HTML body.
    """

    from_header: str
    sender_email: str
    to: list[str] = Field(default_factory=list)
    bcc: list[str] = Field(default_factory=list)
    subject: str
    html: str

    @property
    def envelope_recipients(self) -> list[str]:
        """Every address the relay must deliver to, To first."""
        return [*self.to, *self.bcc]


class SendEmailResult(CamelModel):
    """Outcome of a successful bulk send."""

    message_id: str = Field(..., description="Message-ID assigned to the email")
    sender_name: str = Field(..., description="Echoed sender display name")
    sender_email: str = Field(..., description="Echoed sender address")
    recipient_count: int = Field(..., ge=1, description="Number of recipients")
    sent_by: str = Field(..., description="Authenticated caller")
    timestamp: datetime = Field(default_factory=utc_now)
