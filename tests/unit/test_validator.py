"""Unit tests for send-email payload validation.

Tests rule order, address format checks and recipient bounds.

Author: Odiseo
Version: 1.0.0
"""

from __future__ import annotations

import pytest

from bulk_mailer.core.exceptions import (
    InvalidFieldTypeError,
    InvalidRecipientFormatError,
    InvalidRecipientsError,
    InvalidSenderFormatError,
    MissingFieldsError,
    TooManyRecipientsError,
)
from bulk_mailer.services.validator import is_valid_email, validate_send_request


class TestIsValidEmail:
    """Tests for the address shape check."""

    @pytest.mark.parametrize("address", [
        "a@b.com",
        "first.last@sub.example.org",
        "UPPER@Example.COM",
        "x+tag@domain.co.uk",
    ])
    def test_valid_addresses(self, address):
        """Test well-formed addresses pass."""
        assert is_valid_email(address) is True

    @pytest.mark.parametrize("address", [
        "bad",
        "not-an-email",
        "no-tld@domain",
        "@domain.com",
        "user@.",
        "two@@signs.com",
        "spa ce@domain.com",
        " lead@domain.com",
        "trail@domain.com\n",
        "",
    ])
    def test_invalid_addresses(self, address):
        """Test malformed addresses fail."""
        assert is_valid_email(address) is False

    def test_non_string_is_invalid(self):
        """Test non-string values fail."""
        assert is_valid_email(None) is False
        assert is_valid_email(42) is False


class TestRequiredFields:
    """Tests for rule 1: every field present."""

    @pytest.mark.parametrize("field", [
        "senderEmail", "senderName", "appPassword", "recipients", "subject", "template",
    ])
    def test_missing_field(self, valid_payload, field):
        """Test each missing field is reported."""
        del valid_payload[field]

        with pytest.raises(MissingFieldsError) as exc_info:
            validate_send_request(valid_payload)

        assert "All fields are required" in exc_info.value.message

    def test_empty_string_counts_as_missing(self, valid_payload):
        """Test empty strings are treated as missing."""
        valid_payload["senderName"] = ""

        with pytest.raises(MissingFieldsError):
            validate_send_request(valid_payload)

    def test_missing_subject_wins_over_other_errors(self, valid_payload):
        """Test missing fields are reported before format problems."""
        del valid_payload["subject"]
        valid_payload["senderEmail"] = "not-an-email"
        valid_payload["recipients"] = ["bad"] * 30

        with pytest.raises(MissingFieldsError):
            validate_send_request(valid_payload)


class TestSenderFormat:
    """Tests for rule 2: sender address shape."""

    def test_invalid_sender(self, valid_payload):
        """Test a malformed sender address is rejected."""
        valid_payload["senderEmail"] = "not-an-email"

        with pytest.raises(InvalidSenderFormatError) as exc_info:
            validate_send_request(valid_payload)

        assert exc_info.value.message == "Invalid sender email format"
        assert exc_info.value.status_code == 400

    def test_sender_checked_before_recipients(self, valid_payload):
        """Test the sender is checked before the recipient list."""
        valid_payload["senderEmail"] = "nope"
        valid_payload["recipients"] = "not-a-list"

        with pytest.raises(InvalidSenderFormatError):
            validate_send_request(valid_payload)

    def test_sender_not_trimmed(self, valid_payload):
        """Test surrounding whitespace is not normalized away."""
        valid_payload["senderEmail"] = " sender@test.com "

        with pytest.raises(InvalidSenderFormatError):
            validate_send_request(valid_payload)


class TestRecipients:
    """Tests for rules 3-5: recipient list."""

    def test_empty_list(self, valid_payload):
        """Test an empty recipient list is rejected as such."""
        valid_payload["recipients"] = []

        with pytest.raises(InvalidRecipientsError) as exc_info:
            validate_send_request(valid_payload)

        assert exc_info.value.message == "Recipients must be a non-empty array"

    def test_not_a_list(self, valid_payload):
        """Test a bare string is not accepted as a recipient list."""
        valid_payload["recipients"] = "one@example.com"

        with pytest.raises(InvalidRecipientsError):
            validate_send_request(valid_payload)

    def test_too_many_recipients(self, valid_payload):
        """Test 26 valid recipients exceed the default limit."""
        valid_payload["recipients"] = [f"user{i}@example.com" for i in range(26)]

        with pytest.raises(TooManyRecipientsError) as exc_info:
            validate_send_request(valid_payload)

        assert exc_info.value.message == "Maximum 25 recipients allowed"

    def test_exactly_max_recipients(self, valid_payload):
        """Test 25 recipients are accepted."""
        valid_payload["recipients"] = [f"user{i}@example.com" for i in range(25)]

        request = validate_send_request(valid_payload)

        assert len(request.recipients) == 25

    def test_custom_limit(self, valid_payload):
        """Test the limit is configurable."""
        with pytest.raises(TooManyRecipientsError) as exc_info:
            validate_send_request(valid_payload, max_recipients=2)

        assert exc_info.value.limit == 2

    def test_limit_checked_before_formats(self, valid_payload):
        """Test the count check runs before per-address checks."""
        valid_payload["recipients"] = ["bad"] * 26

        with pytest.raises(TooManyRecipientsError):
            validate_send_request(valid_payload)

    def test_invalid_recipient_reported(self, valid_payload):
        """Test an invalid recipient is named in the message."""
        valid_payload["recipients"] = ["a@b.com", "bad"]

        with pytest.raises(InvalidRecipientFormatError) as exc_info:
            validate_send_request(valid_payload)

        assert "bad" in exc_info.value.message
        assert exc_info.value.invalid == ["bad"]

    def test_all_invalid_recipients_collected(self, valid_payload):
        """Test every invalid recipient is listed, joined by comma."""
        valid_payload["recipients"] = ["x", "ok@example.com", "y@z"]

        with pytest.raises(InvalidRecipientFormatError) as exc_info:
            validate_send_request(valid_payload)

        assert exc_info.value.message == "Invalid email format for: x, y@z"

    def test_duplicates_allowed(self, valid_payload):
        """Test duplicate recipients are kept in order."""
        valid_payload["recipients"] = ["a@b.com", "a@b.com"]

        request = validate_send_request(valid_payload)

        assert request.recipients == ["a@b.com", "a@b.com"]


class TestValidatedRequest:
    """Tests for the returned request model."""

    def test_fields_pass_through(self, valid_payload):
        """Test values are carried over unmodified."""
        request = validate_send_request(valid_payload)

        assert request.sender_email == "sender@test.com"
        assert request.sender_name == "Test Sender"
        assert request.subject == "Quarterly update"
        assert request.template == "<h1>Hello</h1><p>News inside.</p>"
        assert request.recipients == valid_payload["recipients"]
        assert request.from_header == "Test Sender <sender@test.com>"

    def test_app_password_is_secret(self, valid_payload):
        """Test the app password is hidden in reprs."""
        request = validate_send_request(valid_payload)

        assert request.app_password.get_secret_value() == "abcd efgh ijkl mnop"
        assert "abcd" not in repr(request)

    def test_non_string_text_field(self, valid_payload):
        """Test non-string text fields are rejected."""
        valid_payload["subject"] = 12345

        with pytest.raises(InvalidFieldTypeError) as exc_info:
            validate_send_request(valid_payload)

        assert "subject" in exc_info.value.message


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
