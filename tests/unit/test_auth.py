from __future__ import annotations

from datetime import timedelta

import jwt
import pytest
from skillswap.core.auth import TokenError, create_access_token, decode_access_token, extract_token
from skillswap.core.config import Settings

from tests.utils import TEST_SECRET


@pytest.fixture()
def settings() -> Settings:
    return Settings(SECRET_KEY=TEST_SECRET)


def test_create_and_decode_token_roundtrip(settings: Settings) -> None:
    token = create_access_token("user-123", role="learner", settings=settings)

    payload = decode_access_token(token, settings=settings)

    assert payload["userId"] == "user-123"
    assert payload["role"] == "learner"
    assert payload["exp"] > payload["iat"]


def test_create_token_rejects_unknown_role(settings: Settings) -> None:
    with pytest.raises(TokenError, match="Unsupported role"):
        create_access_token("user-123", role="admin", settings=settings)


def test_decode_rejects_token_signed_with_other_secret(settings: Settings) -> None:
    token = create_access_token(
        "user-123", role="learner", settings=Settings(SECRET_KEY="another-secret")
    )

    with pytest.raises(TokenError, match="Invalid token"):
        decode_access_token(token, settings=settings)


def test_decode_rejects_expired_token(settings: Settings) -> None:
    token = create_access_token(
        "user-123", role="learner", expires_delta=timedelta(seconds=-30), settings=settings
    )

    with pytest.raises(TokenError):
        decode_access_token(token, settings=settings)


def test_decode_rejects_payload_without_user_id(settings: Settings) -> None:
    token = jwt.encode({"sub": "user-123", "exp": 4102444800}, TEST_SECRET, algorithm="HS256")

    with pytest.raises(TokenError, match="Invalid token"):
        decode_access_token(token, settings=settings)


def test_decode_lets_malformed_token_error_through(settings: Settings) -> None:
    with pytest.raises(jwt.DecodeError, match="Not enough segments"):
        decode_access_token("not-a-jwt", settings=settings)


def test_decode_rejects_token_without_expiry(settings: Settings) -> None:
    token = jwt.encode({"userId": "user-123"}, TEST_SECRET, algorithm="HS256")

    with pytest.raises(TokenError, match="Invalid token"):
        decode_access_token(token, settings=settings)


class TestExtractToken:
    def test_cookie_takes_precedence_over_header(self) -> None:
        assert extract_token({"token": "from-cookie"}, "Bearer from-header") == "from-cookie"

    def test_falls_back_to_bearer_header(self) -> None:
        assert extract_token({}, "Bearer from-header") == "from-header"

    def test_header_without_bearer_prefix_is_ignored(self) -> None:
        assert extract_token({}, "Token abc") is None
        assert extract_token({}, "bearer abc") is None

    def test_empty_bearer_value_is_missing(self) -> None:
        assert extract_token({}, "Bearer ") is None

    def test_empty_cookie_falls_back_to_header(self) -> None:
        assert extract_token({"token": ""}, "Bearer abc") == "abc"

    def test_custom_cookie_name(self) -> None:
        assert extract_token({"session": "xyz"}, None, cookie_name="session") == "xyz"
        assert extract_token({"token": "xyz"}, None, cookie_name="session") is None
