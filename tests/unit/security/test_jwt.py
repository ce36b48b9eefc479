"""Unit tests for JWT helpers."""

from datetime import timedelta

from jose import jwt

from notekeep.config import get_settings
from notekeep.security.jwt import (
    create_access_token,
    decode_access_token,
    get_user_id_from_token,
)


class TestAccessTokens:
    """Issue and validate access tokens."""

    def test_round_trip(self):
        token = create_access_token({"sub": "42"})
        payload = decode_access_token(token)

        assert payload["sub"] == "42"
        assert payload["type"] == "access"
        assert payload["exp"] > payload["iat"]
        assert get_user_id_from_token(token) == 42

    def test_default_lifetime_is_one_day(self):
        payload = decode_access_token(create_access_token({"sub": "1"}))
        assert payload["exp"] - payload["iat"] == 24 * 60 * 60

    def test_expired_token_is_rejected(self):
        token = create_access_token({"sub": "1"}, expires_delta=timedelta(seconds=-10))
        assert decode_access_token(token) is None
        assert get_user_id_from_token(token) is None

    def test_tampered_payload_is_rejected(self):
        header, _, signature = create_access_token({"sub": "1"}).split(".")
        forged = create_access_token({"sub": "2"}).split(".")[1]
        assert decode_access_token(f"{header}.{forged}.{signature}") is None

    def test_foreign_secret_is_rejected(self):
        token = jwt.encode({"sub": "1", "type": "access"}, "other-secret", algorithm="HS256")
        assert decode_access_token(token) is None

    def test_wrong_token_type_is_rejected(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": "1", "type": "refresh"}, settings.secret_key, algorithm=settings.algorithm
        )
        assert decode_access_token(token) is None

    def test_non_numeric_subject(self):
        token = create_access_token({"sub": "alice"})
        assert decode_access_token(token) is not None
        assert get_user_id_from_token(token) is None

    def test_missing_subject(self):
        assert get_user_id_from_token(create_access_token({})) is None

    def test_garbage(self):
        assert decode_access_token("not-a-jwt") is None
