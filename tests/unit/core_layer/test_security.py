"""
Unit Tests for Password Hashing and Access Tokens
"""

import time

import jwt
import pytest

from showlist.core.exceptions import TokenError
from showlist.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


@pytest.mark.unit
class TestPasswords:
    def test_hash_then_verify(self):
        hashed = hash_password("secret1")

        assert hashed != "secret1"
        assert verify_password("secret1", hashed) is True
        assert verify_password("secret2", hashed) is False

    def test_hashes_are_salted(self):
        assert hash_password("secret1") != hash_password("secret1")

    def test_corrupt_hash_does_not_verify(self):
        assert verify_password("secret1", "not-a-bcrypt-hash") is False


@pytest.mark.unit
class TestAccessTokens:
    def test_round_trip_claims(self, test_settings):
        auth = test_settings.auth
        issued_at = int(time.time())
        token = create_access_token("user-1", True, auth, now=issued_at)

        payload = decode_access_token(token, auth)

        assert payload.user_id == "user-1"
        assert payload.onboarded is True
        assert payload.expires_at == issued_at + auth.JWT_EXPIRE_SECONDS

    def test_expired_token(self, test_settings):
        auth = test_settings.auth
        token = create_access_token("user-1", False, auth, now=1_000)

        with pytest.raises(TokenError, match="expired"):
            decode_access_token(token, auth)

    def test_wrong_secret(self, test_settings):
        token = create_access_token("user-1", False, test_settings.auth)
        other = test_settings.model_copy(update={"JWT_SECRET": "a-completely-different-secret-value"})

        with pytest.raises(TokenError):
            decode_access_token(token, other.auth)

    def test_garbage_token(self, test_settings):
        with pytest.raises(TokenError):
            decode_access_token("not.a.token", test_settings.auth)

    def test_token_without_user_id(self, test_settings):
        auth = test_settings.auth
        token = jwt.encode({"onboarded": True}, auth.JWT_SECRET, algorithm=auth.JWT_ALGORITHM)

        with pytest.raises(TokenError, match="payload"):
            decode_access_token(token, auth)

    def test_token_error_is_forbidden(self):
        assert TokenError("x").status_code == 403
