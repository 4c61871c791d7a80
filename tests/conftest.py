"""Pytest configuration and fixtures for bulk mailer tests.

Provides reusable fixtures for unit and integration tests including
test configuration, mocked SMTP connections and transports, and a FastAPI
test client.

Author: Odiseo
Version: 1.0.0
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from typing import Any
from unittest.mock import MagicMock

import pytest

# Set test environment before importing application modules
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

_APP_HANDLER_TYPES = (logging.StreamHandler, logging.handlers.RotatingFileHandler)

TEST_USERS = {
    "admin": "admin123",
    "user": "user123",
    "demo": "demo123",
}


# =============================================================================
# Logging Isolation
# =============================================================================
@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo setup_logging() side effects after each test."""
    from bulk_mailer.core.logger import reset_banner

    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    reset_banner()
    yield
    for handler in list(root.handlers):
        if handler not in saved_handlers and type(handler) in _APP_HANDLER_TYPES:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)
    reset_banner()


# =============================================================================
# Configuration Fixtures
# =============================================================================
@pytest.fixture
def test_config():
    """Create a MailerConfig isolated from the environment and .env file."""
    from bulk_mailer.config import MailerConfig

    return MailerConfig(
        _env_file=None,
        JWT_SECRET="test-secret-key",
        AUTH_USERS=dict(TEST_USERS),
        PORT=3000,
        SMTP_HOST="smtp.test.com",
        SMTP_PORT=587,
        SMTP_TIMEOUT=30,
        SEND_TIMEOUT=5,
        LOG_TO_FILE=False,
    )


# =============================================================================
# Auth Fixtures
# =============================================================================
@pytest.fixture
def token_service():
    """Create a TokenService with the test secret."""
    from bulk_mailer.auth import TokenService

    return TokenService(secret="test-secret-key", expire_hours=24)


@pytest.fixture
def credential_store():
    """Create a CredentialStore with the test users."""
    from bulk_mailer.auth import CredentialStore

    return CredentialStore(TEST_USERS)


@pytest.fixture
def auth_service(credential_store, token_service):
    """Create an AuthService wired to the test store and tokens."""
    from bulk_mailer.auth import AuthService

    return AuthService(credential_store, token_service, expires_in="24h")


# =============================================================================
# SMTP Fixtures
# =============================================================================
@pytest.fixture
def smtp_config():
    """Create an SMTPConfig for one test sender."""
    from bulk_mailer.models.smtp_config import SMTPConfig

    return SMTPConfig(
        host="smtp.test.com",
        port=587,
        username="sender@test.com",
        password="app-password",
        use_tls=True,
        timeout=30,
    )


@pytest.fixture
def mock_smtp_connection() -> MagicMock:
    """Create a mock smtplib.SMTP connection."""
    smtp = MagicMock()
    smtp.noop.return_value = (250, b"OK")
    smtp.send_message.return_value = {}
    smtp.starttls.return_value = (220, b"TLS ready")
    smtp.login.return_value = (235, b"Authentication successful")
    smtp.quit.return_value = (221, b"Bye")
    return smtp


@pytest.fixture
def mock_transport() -> MagicMock:
    """Create a mock SMTPClient that always delivers."""
    transport = MagicMock()
    transport.__enter__.return_value = transport
    transport.__exit__.return_value = None
    transport.verify.return_value = None
    transport.send.return_value = "<test-message-id@test.com>"
    return transport


@pytest.fixture
def transport_factory(mock_transport: MagicMock) -> MagicMock:
    """Factory returning the mock transport for every sender session."""
    return MagicMock(return_value=mock_transport)


# =============================================================================
# Request Fixtures
# =============================================================================
@pytest.fixture
def valid_payload() -> dict[str, Any]:
    """Create a valid send-email payload."""
    return {
        "senderEmail": "sender@test.com",
        "senderName": "Test Sender",
        "appPassword": "abcd efgh ijkl mnop",
        "recipients": ["one@example.com", "two@example.com", "three@example.com"],
        "subject": "Quarterly update",
        "template": "<h1>Hello</h1><p>News inside.</p>",
    }


# =============================================================================
# Network Fixtures
# =============================================================================
@pytest.fixture
def mock_inspector() -> MagicMock:
    """Create a NetworkInspector stub with one LAN interface."""
    from bulk_mailer.models.server_info import NetworkInterface

    inspector = MagicMock()
    inspector.list_ipv4_interfaces.return_value = [
        NetworkInterface(interface="eth0", address="192.168.1.20", netmask="255.255.255.0"),
    ]
    inspector.process_start_time.return_value = 0.0
    return inspector


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================
@pytest.fixture
def app_state(test_config, transport_factory, mock_inspector):
    """Build application state with stubbed transport and network."""
    from bulk_mailer.api.main import build_state

    return build_state(
        test_config,
        transport_factory=transport_factory,
        inspector=mock_inspector,
    )


@pytest.fixture
def test_client(app_state):
    """Create a FastAPI test client with mocked dependencies."""
    from contextlib import asynccontextmanager

    from fastapi import FastAPI
    from fastapi.testclient import TestClient

    import bulk_mailer.api.main as main_module

    # Mock lifespan that skips logging setup and real collaborators
    @asynccontextmanager
    async def mock_lifespan(app: FastAPI):
        main_module.app_state = app_state
        yield
        main_module.app_state = None

    test_app = main_module.create_app(lifespan_handler=mock_lifespan)

    with TestClient(test_app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def auth_headers(test_client) -> dict[str, str]:
    """Log in as the default user and return the Authorization header."""
    response = test_client.post(
        "/api/login",
        json={"username": "user", "password": "user123"},
    )
    token = response.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}
