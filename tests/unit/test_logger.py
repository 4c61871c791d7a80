"""Unit tests for logging helpers.

Author: Odiseo
Version: 1.0.0
"""

from __future__ import annotations

import logging

import pytest

from bulk_mailer.core.logger import log_context, mask_secret, setup_logging


class TestLogContext:
    """Tests for log context formatting."""

    def test_full_context(self):
        """Test user, sender, count and extras are all rendered."""
        result = log_context("send_bulk", sender="a@b.com", recipients=3, user="admin", policy="bcc_all")

        assert result == "[admin] send_bulk | a@b.com -> 3 recipients (policy=bcc_all)"

    def test_operation_only(self):
        """Test a bare operation is returned unchanged."""
        assert log_context("login") == "login"

    def test_count_without_sender(self):
        """Test the recipient count renders without a sender."""
        assert log_context("send_bulk", recipients=2) == "send_bulk | 2 recipients"


class TestMaskSecret:
    """Tests for secret masking."""

    @pytest.mark.parametrize("secret,expected", [
        ("", "(not set)"),
        ("ab", "***"),
        ("abcdef", "a****f"),
    ])
    def test_mask(self, secret, expected):
        """Test only the first and last characters survive."""
        assert mask_secret(secret) == expected


class TestSetupLogging:
    """Tests for root logger configuration."""

    def test_writes_rotating_files(self, tmp_path):
        """Test the main and error log files receive records."""
        setup_logging(log_dir=tmp_path, log_level="INFO")

        log = logging.getLogger("bulk_mailer.services.test")
        log.info("delivered")
        log.error("relay down")
        for handler in logging.getLogger().handlers:
            handler.flush()

        main_log = (tmp_path / "bulk_mailer.log").read_text(encoding="utf-8")
        error_log = (tmp_path / "bulk_mailer.error.log").read_text(encoding="utf-8")
        assert "delivered" in main_log
        assert "relay down" in error_log
        assert "delivered" not in error_log

    def test_console_only(self, tmp_path):
        """Test no files are created when file logging is off."""
        setup_logging(log_dir=tmp_path / "logs", enable_file=False)

        assert not (tmp_path / "logs").exists()
        assert len(logging.getLogger().handlers) == 1

    def test_summary_masks_secret(self, test_config, capsys):
        """Test the startup summary never prints the signing secret."""
        setup_logging(enable_file=False, settings=test_config)

        out = capsys.readouterr().out
        assert "test-secret-key" not in out
        assert "t*************y" in out
        assert "smtp.test.com:587" in out

    def test_banner_printed_once(self, capsys):
        """Test a second setup does not repeat the banner."""
        setup_logging(enable_file=False)
        first = capsys.readouterr().out
        setup_logging(enable_file=False)
        second = capsys.readouterr().out

        assert "██" in first
        assert "██" not in second


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
