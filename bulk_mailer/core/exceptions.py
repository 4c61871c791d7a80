"""Custom exceptions for the bulk mailer service.

Every exception carries the HTTP status, a client-facing message and a
stable error code so the API layer can render them with a single handler.

Author: Odiseo
Created: 2025-10-18
Version: 1.0.0
"""

from __future__ import annotations


class MailerError(Exception):
    """Base exception for all bulk mailer errors.

    Serves as the parent class for all custom exceptions in the service,
    allowing consumers to catch every mailer failure with one except block.

    Attributes:
        message (str): Client-facing description.
        code (str): Stable machine-readable error code.
        status_code (int): HTTP status the API responds with.

    Example:
        try:
            auth_service.login(username, password)
        except MailerError as e:
            logger.error(f"Mailer error [{e.code}]: {e}")
    """

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "Something went wrong!"

    def __init__(self, message: str | None = None):
        """Initialize mailer error.

        Args:
            message: Error description (defaults to the class message).
        """
        self.message = message or self.default_message
        super().__init__(self.message)


# =============================================================================
# Authentication / Authorization
# =============================================================================
class AuthenticationError(MailerError):
    """Raised when a login does not match any known credential pair.

    The message never reveals which of username or password was wrong.
    """

    status_code = 401
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid username or password"


class AuthorizationError(MailerError):
    """Base exception for bearer token failures."""

    status_code = 401
    code = "UNAUTHORIZED"
    default_message = "Access denied."


class NoTokenError(AuthorizationError):
    """Raised when the Authorization header is absent or has no token segment."""

    status_code = 401
    code = "NO_TOKEN"
    default_message = "Access denied. No token provided."


class InvalidTokenError(AuthorizationError):
    """Raised when a token fails signature, expiry or claim checks."""

    status_code = 403
    code = "INVALID_TOKEN"
    default_message = "Invalid token."


# =============================================================================
# Request validation
# =============================================================================
class ValidationError(MailerError):
    """Base exception for malformed send-email payloads (always HTTP 400)."""

    status_code = 400
    code = "INVALID_REQUEST"
    default_message = "Invalid request body"


class MissingFieldsError(ValidationError):
    code = "MISSING_FIELDS"
    default_message = (
        "All fields are required: senderEmail, senderName, appPassword, "
        "recipients, subject, template"
    )


class InvalidSenderFormatError(ValidationError):
    code = "INVALID_SENDER_FORMAT"
    default_message = "Invalid sender email format"


class InvalidRecipientsError(ValidationError):
    code = "INVALID_RECIPIENTS"
    default_message = "Recipients must be a non-empty array"


class TooManyRecipientsError(ValidationError):
    """Raised when the recipient list exceeds the configured maximum.

    Attributes:
        limit (int): Maximum number of recipients allowed.
    """

    code = "TOO_MANY_RECIPIENTS"

    def __init__(self, limit: int):
        super().__init__(f"Maximum {limit} recipients allowed")
        self.limit = limit


class InvalidRecipientFormatError(ValidationError):
    """Raised when one or more recipient addresses fail the format check.

    Attributes:
        invalid (list[str]): Every offending address, in input order.
    """

    code = "INVALID_RECIPIENT_FORMAT"

    def __init__(self, invalid: list[str]):
        super().__init__(f"Invalid email format for: {', '.join(invalid)}")
        self.invalid = invalid


class InvalidFieldTypeError(ValidationError):
    """Raised when a text field is present but not a string."""

    code = "INVALID_FIELD_TYPE"

    def __init__(self, fields: list[str]):
        super().__init__(f"Fields must be strings: {', '.join(fields)}")
        self.fields = fields


# =============================================================================
# Mail transport
# =============================================================================
class TransportError(MailerError):
    """Exception raised for SMTP delivery failures.

    Attributes:
        message (str): Client-facing description.
        detail (str, optional): Raw underlying error text, for operator logs.

    Example:
        raise TransportError(detail="552 Message size exceeds fixed limit")
    """

    status_code = 500
    code = "SMTP_ERROR"
    default_message = "Failed to send email"

    def __init__(self, message: str | None = None, detail: str | None = None):
        """Initialize transport error.

        Args:
            message: Client-facing description.
            detail: Raw error text from the underlying transport.
        """
        super().__init__(message)
        self.detail = detail


class TransportAuthError(TransportError):
    """Raised when the remote mail provider rejects the sender credentials."""

    status_code = 401
    code = "SMTP_AUTH_FAILED"
    default_message = "Authentication failed. Please check your email and app password."


class TransportConnectionError(TransportError):
    """Raised when the relay is unreachable or does not answer in time."""

    status_code = 503
    code = "SMTP_CONNECTION_FAILED"
    default_message = "Connection failed. Please check your internet connection."


# =============================================================================
# Server information
# =============================================================================
class ServerInfoError(MailerError):
    """Raised when the host or network interfaces cannot be inspected."""

    status_code = 500
    code = "SERVER_INFO_UNAVAILABLE"
    default_message = "Failed to retrieve server information"
