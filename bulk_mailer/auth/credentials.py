"""Static credential store.

Author: Odiseo
Created: 2025-10-18
Version: 1.0.0
"""

from __future__ import annotations

import secrets
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any


class CredentialStore:
    """Read-only username to password table.

    Loaded once at startup from configuration and shared by every request.
    Comparison is exact and case-sensitive.
    """

    def __init__(self, credentials: Mapping[str, str]) -> None:
        self._credentials = MappingProxyType(dict(credentials))

    def __len__(self) -> int:
        return len(self._credentials)

    def __contains__(self, username: object) -> bool:
        return username in self._credentials

    def authenticate(self, username: Any, password: Any) -> bool:
        """Check a username/password pair against the table.

        Args:
            username: Supplied username (may be missing).
            password: Supplied password (may be missing).

        Returns:
            True only for an exact match of both values.
        """
        if not isinstance(username, str) or not isinstance(password, str):
            return False

        expected = self._credentials.get(username)
        if expected is None:
            return False

        # Timing-safe comparison
        return secrets.compare_digest(password.encode(), expected.encode())
