"""SMTP client for bulk email delivery.

Opens one authenticated session per sender, verifies the credentials, and
delivers a single message to the whole recipient envelope. Gmail is the
default relay; any STARTTLS-capable server works.

Features:
- Explicit verify step (connect, STARTTLS, login) before sending
- Credential rejection classified apart from network failures
- Multipart HTML emails with a generated Message-ID
- BCC recipients kept out of the headers

Author: Odiseo
Version: 1.0.0
"""

from __future__ import annotations

import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formatdate, make_msgid

from bulk_mailer.core.exceptions import (
    TransportAuthError,
    TransportConnectionError,
    TransportError,
)
from bulk_mailer.core.logger import get_logger
from bulk_mailer.models.email import OutboundMessage
from bulk_mailer.models.smtp_config import SMTPConfig

logger = get_logger(__name__)


class SMTPClient:
    """SMTP delivery client bound to a single sender.

    The client holds the sender's credentials only for the lifetime of the
    instance; use it as a context manager so the session is always closed.

    Attributes:
        config: SMTP session configuration.
    """

    def __init__(self, smtp_config: SMTPConfig) -> None:
        """Initialize SMTP client.

        Args:
            smtp_config: Relay settings plus the sender's credentials.
        """
        self.config = smtp_config
        self._connection: smtplib.SMTP | None = None

        logger.debug(f"SMTP Client initialized: {self.config.host}:{self.config.port}")

    def _create_connection(self) -> smtplib.SMTP:
        """Create and authenticate a new SMTP connection.

        Returns:
            New SMTP connection.

        Raises:
            TransportAuthError: If the relay rejects the credentials.
            TransportConnectionError: If the relay cannot be reached.
            TransportError: For any other SMTP failure.
        """
        smtp: smtplib.SMTP | None = None
        try:
            logger.debug(f"Connecting to SMTP: {self.config.host}:{self.config.port}")
            smtp = smtplib.SMTP(
                self.config.host,
                self.config.port,
                timeout=self.config.timeout,
            )

            if self.config.use_tls:
                logger.debug("Starting TLS...")
                smtp.starttls()

            logger.debug("Authenticating...")
            smtp.login(self.config.username, self.config.password.get_secret_value())

            logger.debug("SMTP connection established")
            return smtp

        except Exception as e:
            if smtp is not None:
                self._quit(smtp)
            logger.error(f"Failed to establish SMTP connection: {e}")
            raise self.classify_error(e) from e

    def verify(self) -> None:
        """Connect and authenticate without sending anything.

        Raises:
            TransportAuthError: If the relay rejects the credentials.
            TransportConnectionError: If the relay cannot be reached.
            TransportError: For any other SMTP failure.
        """
        if self._connection is None:
            self._connection = self._create_connection()
        logger.debug(f"SMTP credentials verified for {self.config.username}")

    def send(self, message: OutboundMessage) -> str:
        """Send one message to every envelope recipient.

        Verifies the session first if that has not happened yet.

        Args:
            message: Message with the recipient policy already applied.

        Returns:
            The Message-ID header assigned to the email.

        Raises:
            TransportError: If sending fails (or a subclass, see verify()).
        """
        self.verify()

        msg = self.build_mime(message)
        recipients = message.envelope_recipients

        try:
            refused = self._connection.send_message(
                msg,
                from_addr=message.sender_email,
                to_addrs=recipients,
            )
        except Exception as e:
            logger.error(f"Failed to send email from {message.sender_email}: {e}")
            raise self.classify_error(e) from e

        if refused:
            logger.warning(f"Relay refused {len(refused)} recipient(s): {', '.join(refused)}")

        logger.info(
            f"Email sent from {message.sender_email} to {len(recipients)} recipients "
            f"- Subject: {message.subject[:50]}"
        )
        return msg["Message-ID"]

    @staticmethod
    def build_mime(message: OutboundMessage) -> MIMEMultipart:
        """Build the MIME message. BCC addresses never appear in headers."""
        msg = MIMEMultipart("alternative")
        msg["From"] = message.from_header
        if message.to:
            msg["To"] = ", ".join(message.to)
        msg["Subject"] = message.subject
        msg["Date"] = formatdate(localtime=False)

        domain = message.sender_email.rpartition("@")[2] or None
        msg["Message-ID"] = make_msgid(domain=domain)

        msg.attach(MIMEText(message.html, "html", "utf-8"))
        return msg

    @staticmethod
    def classify_error(error: Exception) -> TransportError:
        """Map a raw SMTP/socket exception to the transport error taxonomy.

        Args:
            error: Exception raised by smtplib or the socket layer.

        Returns:
            TransportAuthError for rejected credentials, TransportConnectionError
            for unreachable or dropped relays, TransportError otherwise.
        """
        detail = str(error) or error.__class__.__name__
        if isinstance(error, TransportError):
            return error
        if isinstance(error, smtplib.SMTPAuthenticationError):
            return TransportAuthError(detail=detail)
        if isinstance(error, (smtplib.SMTPConnectError, smtplib.SMTPServerDisconnected)):
            return TransportConnectionError(detail=detail)
        # SMTPException derives from OSError, so check it before the socket errors
        if isinstance(error, smtplib.SMTPException):
            return TransportError(detail=detail)
        if isinstance(error, OSError):
            return TransportConnectionError(detail=detail)
        return TransportError(detail=detail)

    @staticmethod
    def _quit(smtp: smtplib.SMTP) -> None:
        try:
            smtp.quit()
        except (smtplib.SMTPException, OSError) as e:
            logger.debug(f"Error closing SMTP connection (non-critical): {e}")

    def close(self) -> None:
        """Close SMTP connection and cleanup resources."""
        if self._connection is not None:
            self._quit(self._connection)
            self._connection = None
            logger.debug("SMTP client closed")

    def __enter__(self) -> SMTPClient:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close connection."""
        self.close()
