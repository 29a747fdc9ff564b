"""Unit tests for password hashing and access tokens."""

from datetime import datetime, timedelta, timezone

from jose import jwt

from abroadly.server.core.config import AuthConfig
from abroadly.server.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

CONFIG = AuthConfig(jwt_secret="unit-test-secret", bcrypt_rounds=4)


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("secret123", CONFIG)
        assert hashed != "secret123"
        assert hashed.startswith("$2b$04$")
        assert verify_password("secret123", hashed)
        assert not verify_password("wrong", hashed)

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("secret123", "not-a-bcrypt-hash") is False


class TestAccessTokens:
    def test_round_trip(self):
        token = create_access_token(42, CONFIG)
        assert decode_access_token(token, CONFIG) == 42

    def test_token_expires_after_configured_days(self):
        token = create_access_token(1, CONFIG)
        claims = jwt.get_unverified_claims(token)
        assert claims["sub"] == "1"
        assert claims["exp"] - claims["iat"] == timedelta(days=7).total_seconds()

    def test_wrong_secret(self):
        token = create_access_token(42, CONFIG)
        assert decode_access_token(token, AuthConfig(jwt_secret="another-secret")) is None

    def test_expired_token(self):
        past = datetime.now(timezone.utc) - timedelta(days=1)
        token = jwt.encode(
            {"sub": "42", "exp": int(past.timestamp())}, CONFIG.jwt_secret, algorithm=CONFIG.jwt_algorithm
        )
        assert decode_access_token(token, CONFIG) is None

    def test_non_numeric_subject(self):
        token = jwt.encode({"sub": "alice"}, CONFIG.jwt_secret, algorithm=CONFIG.jwt_algorithm)
        assert decode_access_token(token, CONFIG) is None

    def test_garbage_token(self):
        assert decode_access_token("not.a.token", CONFIG) is None
