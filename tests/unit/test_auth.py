"""Unit tests for credentials, bearer tokens and login.

Author: Odiseo
Version: 1.0.0
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from bulk_mailer.auth import CredentialStore, TokenService
from bulk_mailer.core.exceptions import AuthenticationError, InvalidTokenError, NoTokenError


class TestCredentialStore:
    """Tests for the static credential table."""

    @pytest.mark.parametrize("username,password", [
        ("admin", "admin123"),
        ("user", "user123"),
        ("demo", "demo123"),
    ])
    def test_known_pairs(self, credential_store, username, password):
        """Test every configured pair authenticates."""
        assert credential_store.authenticate(username, password) is True

    @pytest.mark.parametrize("username,password", [
        ("admin", "wrong"),
        ("admin", "user123"),
        ("Admin", "admin123"),
        ("admin", "ADMIN123"),
        ("nobody", "admin123"),
        ("", ""),
        (None, "admin123"),
        ("admin", None),
    ])
    def test_unknown_pairs(self, credential_store, username, password):
        """Test mismatches, case differences and missing values fail."""
        assert credential_store.authenticate(username, password) is False

    def test_store_is_read_only(self):
        """Test later changes to the source mapping do not leak in."""
        source = {"a": "1"}
        store = CredentialStore(source)
        source["b"] = "2"

        assert "b" not in store
        assert len(store) == 1


class TestTokenService:
    """Tests for token issue and verification."""

    def test_issue_then_decode(self, token_service):
        """Test a fresh token verifies and carries the username."""
        token = token_service.issue("admin")

        claims = token_service.decode(token)

        assert claims.username == "admin"
        assert claims.expires_at - claims.issued_at == timedelta(hours=24)

    def test_expired_token_rejected(self, token_service):
        """Test a token issued more than 24h ago fails."""
        issued = datetime.now(timezone.utc) - timedelta(hours=24, minutes=1)
        token = token_service.issue("admin", now=issued)

        with pytest.raises(InvalidTokenError):
            token_service.decode(token)

    def test_token_still_valid_before_expiry(self, token_service):
        """Test a token issued 23h ago still verifies."""
        issued = datetime.now(timezone.utc) - timedelta(hours=23)
        token = token_service.issue("user", now=issued)

        assert token_service.decode(token).username == "user"

    def test_wrong_secret_rejected(self, token_service):
        """Test a token signed with another key fails."""
        other = TokenService(secret="another-secret")
        token = other.issue("admin")

        with pytest.raises(InvalidTokenError):
            token_service.decode(token)

    def test_garbage_rejected(self, token_service):
        """Test a non-JWT string fails."""
        with pytest.raises(InvalidTokenError) as exc_info:
            token_service.decode("garbage")

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "Invalid token."

    def test_missing_username_claim_rejected(self, token_service):
        """Test a correctly signed token without username fails."""
        exp = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jwt.encode({"sub": "admin", "exp": exp}, "test-secret-key", algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            token_service.decode(token)


class TestVerifyHeader:
    """Tests for Authorization header handling."""

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer   "])
    def test_no_token(self, token_service, header):
        """Test a missing header or token segment raises NoTokenError."""
        with pytest.raises(NoTokenError) as exc_info:
            token_service.verify_header(header)

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Access denied. No token provided."

    def test_bearer_garbage(self, token_service):
        """Test an unverifiable token raises InvalidTokenError."""
        with pytest.raises(InvalidTokenError):
            token_service.verify_header("Bearer garbage")

    def test_valid_header(self, token_service):
        """Test a valid bearer header yields the claims."""
        token = token_service.issue("demo")

        claims = token_service.verify_header(f"Bearer {token}")

        assert claims.username == "demo"

    def test_extract_token_takes_second_segment(self):
        """Test the token is the second whitespace-separated segment."""
        assert TokenService.extract_token("Bearer abc.def") == "abc.def"
        assert TokenService.extract_token("Bearer  abc.def  extra") == "abc.def"
        assert TokenService.extract_token("abc.def") is None


class TestLogin:
    """Tests for AuthService.login."""

    def test_login_success(self, auth_service, token_service):
        """Test admin/admin123 receives a verifiable token."""
        result = auth_service.login("admin", "admin123")

        assert result.username == "admin"
        assert result.expires_in == "24h"
        assert result.token_type == "Bearer"
        assert token_service.decode(result.token).username == "admin"

    def test_login_wrong_password(self, auth_service):
        """Test a wrong password raises AuthenticationError."""
        with pytest.raises(AuthenticationError) as exc_info:
            auth_service.login("admin", "wrong")

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Invalid username or password"

    def test_login_unknown_user_same_message(self, auth_service):
        """Test an unknown user gets the same message as a wrong password."""
        with pytest.raises(AuthenticationError) as exc_info:
            auth_service.login("ghost", "admin123")

        assert exc_info.value.message == "Invalid username or password"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
