"""Bulk send orchestration.

Turns a validated request into an outbound message, hands it to the SMTP
transport with the sender's credentials, and interprets the outcome.

The SMTP exchange is blocking, so it runs in a worker thread bounded by
``SEND_TIMEOUT``. Sends are all-or-nothing for the whole batch and are never
retried.

Author: Odiseo
Version: 1.0.0
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from bulk_mailer.clients.smtp import SMTPClient
from bulk_mailer.config.settings import BccPolicy, MailerConfig
from bulk_mailer.core.exceptions import TransportConnectionError, TransportError
from bulk_mailer.core.logger import get_logger, log_context
from bulk_mailer.models.email import OutboundMessage, SendEmailRequest, SendEmailResult
from bulk_mailer.models.smtp_config import SMTPConfig

logger = get_logger(__name__)

TransportFactory = Callable[[SMTPConfig], SMTPClient]


class BulkMailer:
    """Sends one message to a batch of recipients on behalf of a sender.

    Attributes:
        config: Service configuration (relay, timeouts, recipient policy).
        transport_factory: Builds an SMTP client for one sender session.
    """

    def __init__(
        self,
        config: MailerConfig,
        transport_factory: TransportFactory = SMTPClient,
    ) -> None:
        self.config = config
        self.transport_factory = transport_factory

    def build_message(self, request: SendEmailRequest) -> OutboundMessage:
        """Apply the configured recipient policy.

        Args:
            request: Validated send request.

        Returns:
            Message whose To/BCC split follows ``BCC_POLICY``.
        """
        policy = self.config.BCC_POLICY
        recipients = list(request.recipients)

        if policy is BccPolicy.SENDER_TO:
            to, bcc = [request.sender_email], recipients
        elif policy is BccPolicy.FIRST_TO:
            to, bcc = recipients[:1], recipients[1:]
        else:
            to, bcc = [], recipients

        return OutboundMessage(
            from_header=request.from_header,
            sender_email=request.sender_email,
            to=to,
            bcc=bcc,
            subject=request.subject,
            html=request.template,
        )

    def _deliver(self, request: SendEmailRequest, message: OutboundMessage) -> str:
        """Verify credentials and send. Runs in a worker thread."""
        smtp_config = SMTPConfig(
            **self.config.get_smtp_config(
                request.sender_email,
                request.app_password.get_secret_value(),
            )
        )
        with self.transport_factory(smtp_config) as client:
            client.verify()
            return client.send(message)

    async def send_bulk_email(self, request: SendEmailRequest, username: str) -> SendEmailResult:
        """Deliver a validated request.

        Args:
            request: Validated send request.
            username: Authenticated caller, echoed as ``sentBy``.

        Returns:
            Delivery result with the message id and recipient count.

        Raises:
            TransportAuthError: The relay rejected the sender's credentials.
            TransportConnectionError: The relay was unreachable or timed out.
            TransportError: Any other delivery failure.
        """
        message = self.build_message(request)
        context = log_context(
            "send_bulk",
            sender=request.sender_email,
            recipients=len(request.recipients),
            user=username,
            policy=self.config.BCC_POLICY.value,
        )
        logger.info(f"Starting: {context}")

        try:
            message_id = await asyncio.wait_for(
                asyncio.to_thread(self._deliver, request, message),
                timeout=self.config.SEND_TIMEOUT,
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"Timed out after {self.config.SEND_TIMEOUT:g}s: {context}")
            raise TransportConnectionError(
                detail=f"SMTP exchange exceeded {self.config.SEND_TIMEOUT:g}s"
            ) from e
        except TransportError as e:
            logger.warning(f"Failed [{e.code}]: {context} - {e.detail}")
            raise
        except Exception as e:
            logger.error(f"Unexpected delivery error: {context} - {e}", exc_info=True)
            raise TransportError(detail=str(e)) from e

        logger.info(f"Completed: {context} (message_id={message_id})")

        return SendEmailResult(
            message_id=message_id,
            sender_name=request.sender_name,
            sender_email=request.sender_email,
            recipient_count=len(request.recipients),
            sent_by=username,
        )
