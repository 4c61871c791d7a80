"""Send-email payload validation.

Pure functions, no I/O. Rules run in a fixed order and the first failing
rule decides the single reported error. Input is validated raw: nothing
is trimmed or lower-cased.

Author: Odiseo
Created: 2025-10-18
Version: 1.0.0
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pydantic import SecretStr

from bulk_mailer.core.exceptions import (
    InvalidFieldTypeError,
    InvalidRecipientFormatError,
    InvalidRecipientsError,
    InvalidSenderFormatError,
    MissingFieldsError,
    TooManyRecipientsError,
)
from bulk_mailer.models.email import SendEmailRequest

DEFAULT_MAX_RECIPIENTS = 25

REQUIRED_FIELDS = (
    "senderEmail",
    "senderName",
    "appPassword",
    "recipients",
    "subject",
    "template",
)

TEXT_FIELDS = ("senderName", "appPassword", "subject", "template")

# local@domain.tld, no whitespace and a single "@"
_EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def is_valid_email(value: Any) -> bool:
    """Check a value against the basic ``local@domain.tld`` address shape."""
    return isinstance(value, str) and _EMAIL_PATTERN.fullmatch(value) is not None


def _is_missing(value: Any) -> bool:
    # Scalars follow truthiness; an empty list is "present" so the
    # recipients rule can report it.
    if value is None:
        return True
    if isinstance(value, (str, bool, int, float)):
        return not value
    return False


def validate_send_request(
    payload: Mapping[str, Any],
    max_recipients: int = DEFAULT_MAX_RECIPIENTS,
) -> SendEmailRequest:
    """Validate a raw send-email payload.

    Rules, in order:
        1. every required field is present and non-empty
        2. senderEmail has a valid address shape
        3. recipients is a non-empty list
        4. recipients has at most ``max_recipients`` entries
        5. every recipient has a valid address shape (all offenders reported)
        6. the remaining text fields are strings

    Args:
        payload: Decoded JSON body.
        max_recipients: Upper bound on the recipient count.

    Returns:
        The validated request.

    Raises:
        ValidationError: A subclass naming the first violated rule.
    """
    if any(_is_missing(payload.get(name)) for name in REQUIRED_FIELDS):
        raise MissingFieldsError()

    sender_email = payload["senderEmail"]
    if not is_valid_email(sender_email):
        raise InvalidSenderFormatError()

    recipients = payload["recipients"]
    if not isinstance(recipients, list) or not recipients:
        raise InvalidRecipientsError()

    if len(recipients) > max_recipients:
        raise TooManyRecipientsError(max_recipients)

    invalid = [str(address) for address in recipients if not is_valid_email(address)]
    if invalid:
        raise InvalidRecipientFormatError(invalid)

    wrong_type = [name for name in TEXT_FIELDS if not isinstance(payload[name], str)]
    if wrong_type:
        raise InvalidFieldTypeError(wrong_type)

    return SendEmailRequest(
        sender_email=sender_email,
        sender_name=payload["senderName"],
        app_password=SecretStr(payload["appPassword"]),
        recipients=list(recipients),
        subject=payload["subject"],
        template=payload["template"],
    )
