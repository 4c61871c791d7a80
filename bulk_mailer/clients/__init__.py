"""Clients module for the bulk mailer.

Contains integrations with external collaborators: the SMTP relay and the
operating system's network interfaces.

Author: Odiseo
Created: 2025-10-18
Version: 1.0.0
"""

from bulk_mailer.clients.network import NetworkInspector
from bulk_mailer.clients.smtp import SMTPClient

__all__ = ["NetworkInspector", "SMTPClient"]
