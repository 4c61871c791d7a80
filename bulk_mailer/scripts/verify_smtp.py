#!/usr/bin/env python3
"""Verify a sender's SMTP credentials against the configured relay.

Runs the same verify step the API performs before every bulk send, and can
optionally deliver a test message.

Usage:
    python -m bulk_mailer.scripts.verify_smtp --email me@gmail.com
    python -m bulk_mailer.scripts.verify_smtp --email me@gmail.com --verbose
    python -m bulk_mailer.scripts.verify_smtp --email me@gmail.com --test-email you@example.com
"""

from __future__ import annotations

import argparse
import getpass
import os
import sys
from email.utils import formataddr

from bulk_mailer.clients.smtp import SMTPClient
from bulk_mailer.config import MailerConfig
from bulk_mailer.core.exceptions import (
    TransportAuthError,
    TransportConnectionError,
    TransportError,
)
from bulk_mailer.core.logger import get_logger, setup_logging
from bulk_mailer.models.email import OutboundMessage
from bulk_mailer.models.smtp_config import SMTPConfig
from bulk_mailer.services.validator import is_valid_email

logger = get_logger(__name__)

PASSWORD_ENV = "SMTP_APP_PASSWORD"


def print_header() -> None:
    """Print script header."""
    print("\n" + "=" * 80)
    print("  📧 Bulk Mailer SMTP Credential Check")
    print("=" * 80)


def print_footer() -> None:
    """Print script footer."""
    print("=" * 80 + "\n")


def print_config(config: MailerConfig, sender: str) -> None:
    """Print the relay settings in use."""
    print("\n📋 Relay Configuration:")
    print(f"  SMTP Host:      {config.SMTP_HOST}")
    print(f"  SMTP Port:      {config.SMTP_PORT}")
    print(f"  Sender:         {sender}")
    print(f"  TLS Enabled:    {'Yes' if config.SMTP_USE_TLS else 'No'}")
    print(f"  Timeout:        {config.SMTP_TIMEOUT}s")


def verify_credentials(smtp_config: SMTPConfig) -> bool:
    """Run the verify step.

    Returns:
        True if the relay accepted the credentials, False otherwise.
    """
    print("\n🧪 Verifying SMTP credentials...")
    try:
        with SMTPClient(smtp_config) as client:
            client.verify()
    except TransportAuthError:
        print("❌ Relay rejected the credentials (check the app password)")
        return False
    except TransportConnectionError as e:
        print(f"❌ Could not reach the relay: {e.detail}")
        return False
    except TransportError as e:
        print(f"❌ SMTP error: {e.detail}")
        return False

    print("✅ Credentials accepted")
    return True


def send_test_email(smtp_config: SMTPConfig, recipient: str) -> bool:
    """Send a test message to ``recipient`` via BCC.

    Returns:
        True if the relay accepted the message, False otherwise.
    """
    print(f"\n📧 Sending test email to: {recipient}")
    message = OutboundMessage(
        from_header=formataddr(("Bulk Mailer Test", smtp_config.username)),
        sender_email=smtp_config.username,
        bcc=[recipient],
        subject="Bulk Mailer - Test Email",
        html="<h1>Test Email</h1><p>Your SMTP credentials work with Bulk Mailer.</p>",
    )
    try:
        with SMTPClient(smtp_config) as client:
            message_id = client.send(message)
    except TransportError as e:
        print(f"❌ Failed to send test email: {e.message}")
        logger.debug(f"Test email failure detail: {e.detail}")
        return False

    print(f"✅ Test email sent ({message_id})")
    return True


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        0 if every check passed, 1 otherwise.
    """
    parser = argparse.ArgumentParser(
        description="Verify a sender's SMTP credentials against the configured relay.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
The app password is read from ${PASSWORD_ENV} or prompted for.

Examples:
  python -m bulk_mailer.scripts.verify_smtp --email me@gmail.com
  python -m bulk_mailer.scripts.verify_smtp --email me@gmail.com --test-email you@example.com
        """,
    )
    parser.add_argument("--email", "-e", required=True, help="Sender address (SMTP login)")
    parser.add_argument(
        "--test-email",
        "-t",
        metavar="EMAIL",
        help="Send a test email to the specified address",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only print results")
    parser.add_argument("--no-header", action="store_true", help="Suppress header and footer")

    args = parser.parse_args(argv)

    setup_logging(
        log_level="DEBUG" if args.verbose else "INFO",
        console_level="DEBUG" if args.verbose else "WARNING",
        enable_file=False,
    )

    if not is_valid_email(args.email):
        print(f"❌ Invalid sender email format: {args.email}")
        return 1
    if args.test_email and not is_valid_email(args.test_email):
        print(f"❌ Invalid test email format: {args.test_email}")
        return 1

    password = os.environ.get(PASSWORD_ENV) or getpass.getpass("App password: ")
    if not password.strip():
        print("❌ App password is required")
        return 1

    if not args.no_header:
        print_header()

    try:
        config = MailerConfig()
        if not args.quiet:
            print_config(config, args.email)

        smtp_config = SMTPConfig(**config.get_smtp_config(args.email, password))

        ok = verify_credentials(smtp_config)
        if ok and args.test_email:
            ok = send_test_email(smtp_config, args.test_email)
        return 0 if ok else 1

    except Exception as e:
        print(f"\n❌ Verification script error: {e}")
        logger.exception("Verification script failed")
        return 1

    finally:
        if not args.no_header:
            print_footer()


if __name__ == "__main__":
    sys.exit(main())
