"""Configuration module for the bulk mailer.

Loads and validates service settings from environment variables or .env file.

Author: Odiseo
Created: 2025-10-18
Version: 1.0.0
"""

from bulk_mailer.config.settings import BccPolicy, MailerConfig

__all__ = ["BccPolicy", "MailerConfig"]
