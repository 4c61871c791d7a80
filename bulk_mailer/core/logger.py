"""Logging setup for the bulk mailer.

One call to ``setup_logging()`` at startup wires the root logger:

    - stdout handler (short format)
    - ``bulk_mailer.log``: rotating, everything at ``file_level`` and above
    - ``bulk_mailer.error.log``: rotating, errors only

Modules obtain loggers with ``get_logger(__name__)``. Passwords, app
passwords and the signing secret are never written; the startup summary
masks the secret.

Author: Odiseo
Created: 2025-10-18
Version: 1.0.0
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from bulk_mailer.config.settings import MailerConfig

DEFAULT_LOG_DIR = Path(__file__).parent.parent / "logs"

_FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
_CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_ERROR_LOG_MAX_BYTES = 5 * 1024 * 1024
_ERROR_LOG_BACKUPS = 3

# Transport and service internals are chatty at DEBUG; auth stays at INFO
# so failed logins are visible without credential noise.
_MODULE_LEVELS = {
    "bulk_mailer.clients": logging.DEBUG,
    "bulk_mailer.services": logging.DEBUG,
    "bulk_mailer.auth": logging.INFO,
    "bulk_mailer.config": logging.INFO,
    "uvicorn.access": logging.WARNING,
}

_banner_shown = False

_DIM = "\033[2m"
_BOLD = "\033[1m"
_RESET = "\033[0m"
_CYAN = "\033[96m"
_GREEN = "\033[92m"
_YELLOW = "\033[93m"
_RULE = f"{_DIM}{'─' * 64}{_RESET}"

# fmt: off
BANNER = f"""{_BOLD}{_CYAN}
  ██████╗ ██╗   ██╗██╗     ██╗  ██╗    ███╗   ███╗ █████╗ ██╗██╗
  ██╔══██╗██║   ██║██║     ██║ ██╔╝    ████╗ ████║██╔══██╗██║██║
  ██████╔╝██║   ██║██║     █████╔╝     ██╔████╔██║███████║██║██║
  ██╔══██╗██║   ██║██║     ██╔═██╗     ██║╚██╔╝██║██╔══██║██║██║
  ██████╔╝╚██████╔╝███████╗██║  ██╗    ██║ ╚═╝ ██║██║  ██║██║███████╗
  ╚═════╝  ╚═════╝ ╚══════╝╚═╝  ╚═╝    ╚═╝     ╚═╝╚═╝  ╚═╝╚═╝╚══════╝
{_RESET}"""  # noqa: E501
# fmt: on


def mask_secret(secret: str) -> str:
    """Show only the first and last character of a secret."""
    if not secret:
        return "(not set)"
    if len(secret) <= 2:
        return "***"
    return f"{secret[0]}{'*' * (len(secret) - 2)}{secret[-1]}"


def _summary_sections(settings: "MailerConfig") -> list[tuple[str, list[tuple[str, str]]]]:
    secret = (
        "(built-in default)" if settings.uses_default_secret else mask_secret(settings.JWT_SECRET)
    )
    return [
        ("Service", [
            ("Name", settings.SERVICE_NAME),
            ("Version", settings.SERVICE_VERSION),
            ("Environment", settings.ENVIRONMENT),
            ("Listen", f"{settings.API_HOST}:{settings.PORT}"),
        ]),
        ("Authentication", [
            ("JWT secret", secret),
            ("Algorithm", settings.JWT_ALGORITHM),
            ("Token lifetime", settings.token_expires_in),
            ("Known users", str(len(settings.AUTH_USERS))),
        ]),
        ("SMTP relay", [
            ("Server", f"{settings.SMTP_HOST}:{settings.SMTP_PORT}"),
            ("STARTTLS", "on" if settings.SMTP_USE_TLS else "off"),
            ("Timeouts", f"socket {settings.SMTP_TIMEOUT}s, send {settings.SEND_TIMEOUT:g}s"),
            ("Max recipients", str(settings.MAX_RECIPIENTS)),
            ("Recipient policy", settings.BCC_POLICY.value),
        ]),
        ("Logging", [
            ("Level", settings.LOG_LEVEL),
            ("Files", settings.LOG_DIR if settings.LOG_TO_FILE else "disabled"),
            ("Rotation", f"{settings.LOG_MAX_SIZE_MB} MB x {settings.LOG_BACKUP_COUNT}"),
        ]),
    ]


def print_banner(settings: Optional["MailerConfig"] = None) -> None:
    """Print the startup banner and, if given, a configuration summary.

    Printed at most once per process.
    """
    global _banner_shown  # noqa: PLW0603
    if _banner_shown:
        return
    _banner_shown = True

    print(BANNER)
    print(_RULE)
    if settings is None:
        print()
        return

    for title, rows in _summary_sections(settings):
        print(f"  {_GREEN}{title}{_RESET}")
        for label, value in rows:
            print(f"    {label:<18} {_CYAN}{value}{_RESET}")
    if settings.uses_default_secret:
        print(f"\n  {_YELLOW}! JWT_SECRET not set, using the built-in default{_RESET}")
    print(_RULE)
    print()


def reset_banner() -> None:
    """Allow the banner to be printed again (used on shutdown)."""
    global _banner_shown  # noqa: PLW0603
    _banner_shown = False


def setup_logging(
    log_dir: Path | str | None = None,
    log_level: str = "INFO",
    file_level: str = "DEBUG",
    console_level: str | None = None,
    enable_file: bool = True,
    max_size_mb: int = 10,
    backup_count: int = 5,
    settings: Optional["MailerConfig"] = None,
) -> None:
    """Configure the root logger.

    Args:
        log_dir: Directory for log files. Defaults to ``bulk_mailer/logs``.
        log_level: Console level when ``console_level`` is not given.
        file_level: Level for ``bulk_mailer.log``.
        console_level: Console level override.
        enable_file: Write the rotating log files.
        max_size_mb: Rotation size of ``bulk_mailer.log``.
        backup_count: Rotated copies of ``bulk_mailer.log`` to keep.
        settings: If given, a configuration summary is printed with the banner.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.getLevelName((console_level or log_level).upper()))
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT))
    root.addHandler(console)

    if enable_file:
        directory = Path(log_dir) if log_dir else DEFAULT_LOG_DIR
        directory.mkdir(parents=True, exist_ok=True)
        detailed = logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)

        main_file = logging.handlers.RotatingFileHandler(
            directory / "bulk_mailer.log",
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
        main_file.setLevel(logging.getLevelName(file_level.upper()))
        main_file.setFormatter(detailed)
        root.addHandler(main_file)

        error_file = logging.handlers.RotatingFileHandler(
            directory / "bulk_mailer.error.log",
            maxBytes=_ERROR_LOG_MAX_BYTES,
            backupCount=_ERROR_LOG_BACKUPS,
            encoding="utf-8",
        )
        error_file.setLevel(logging.ERROR)
        error_file.setFormatter(detailed)
        root.addHandler(error_file)

    for name, level in _MODULE_LEVELS.items():
        logging.getLogger(name).setLevel(level)

    print_banner(settings)


def get_logger(name: str, log_level: str | None = None) -> logging.Logger:
    """Return the logger for ``name``, optionally pinning its level.

    Example:
        logger = get_logger(__name__)
        logger.info("Bulk email accepted")
    """
    logger = logging.getLogger(name)
    if log_level:
        logger.setLevel(logging.getLevelName(log_level.upper()))
    return logger


def log_context(
    operation: str,
    sender: str | None = None,
    recipients: int | None = None,
    user: str | None = None,
    **kwargs,
) -> str:
    """Build a one-line context string for log messages.

    Args:
        operation: Operation name (e.g. ``"send_bulk"``, ``"login"``).
        sender: Sender address, if any.
        recipients: Recipient count, if any.
        user: Authenticated username, if any.
        **kwargs: Extra ``key=value`` pairs appended in parentheses.

    Example:
        >>> log_context("send_bulk", sender="a@b.com", recipients=3, user="admin")
        '[admin] send_bulk | a@b.com -> 3 recipients'
    """
    parts = [f"[{user}] {operation}" if user else operation]

    if sender and recipients is not None:
        parts.append(f"{sender} -> {recipients} recipients")
    elif sender:
        parts.append(sender)
    elif recipients is not None:
        parts.append(f"{recipients} recipients")

    context = " | ".join(parts)
    if kwargs:
        context += " (" + ", ".join(f"{k}={v}" for k, v in kwargs.items()) + ")"
    return context
