"""Tests for the request auth guard dependency."""

from __future__ import annotations

import jwt
import pytest
from fastapi import FastAPI, status
from httpx import AsyncClient
from skillswap.api.deps import get_current_identity
from skillswap.core.auth import create_access_token
from skillswap.core.config import Settings
from skillswap.core.errors import AuthenticationError, InternalServerError, InvalidTokenError
from skillswap.domain import Identity

from tests.utils import bearer, make_request


def _foreign_token(user_id: str = "learner-42") -> str:
    """A well-formed token signed with a secret the app does not hold."""
    return create_access_token(
        user_id, role="learner", settings=Settings(SECRET_KEY="someone-elses-secret")
    )


async def test_identity_matches_token_subject(app: FastAPI, settings: Settings) -> None:
    token = create_access_token("learner-42", role="learner", settings=settings)
    request = make_request(app, bearer(token))

    identity = await get_current_identity(request, settings)

    assert identity == Identity(user_id="learner-42")
    assert request.state.identity.user_id == "learner-42"


async def test_cookie_is_read_before_header(app: FastAPI, settings: Settings) -> None:
    cookie_token = create_access_token("from-cookie", role="learner", settings=settings)
    header_token = create_access_token("from-header", role="learner", settings=settings)
    request = make_request(app, {"Cookie": f"token={cookie_token}", **bearer(header_token)})

    identity = await get_current_identity(request, settings)

    assert identity.user_id == "from-cookie"


async def test_missing_token_is_not_authenticated(app: FastAPI, settings: Settings) -> None:
    with pytest.raises(AuthenticationError) as exc_info:
        await get_current_identity(make_request(app), settings)

    assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED
    assert exc_info.value.message == "User not authenticated"


async def test_unverifiable_token_is_invalid(app: FastAPI, settings: Settings) -> None:
    with pytest.raises(InvalidTokenError) as exc_info:
        await get_current_identity(make_request(app, bearer(_foreign_token())), settings)

    assert exc_info.value.message == "Invalid token"


async def test_malformed_token_becomes_internal_error(app: FastAPI, settings: Settings) -> None:
    with pytest.raises(InternalServerError) as exc_info:
        await get_current_identity(make_request(app, bearer("not-a-jwt")), settings)

    assert exc_info.value.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert isinstance(exc_info.value.__cause__, jwt.DecodeError)


async def test_unexpected_failure_becomes_internal_error(
    app: FastAPI, settings: Settings, monkeypatch: pytest.MonkeyPatch
) -> None:
    def explode(*_args, **_kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr("skillswap.api.deps.decode_access_token", explode)

    with pytest.raises(InternalServerError):
        await get_current_identity(make_request(app, bearer("anything")), settings)


class TestGuardedEndpoints:
    async def test_no_credentials_returns_401_envelope(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/v1/ratings/listing/listing-1")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {
            "success": False,
            "message": "User not authenticated",
            "code": "not_authenticated",
        }

    async def test_invalid_token_returns_distinct_message(
        self, async_client: AsyncClient
    ) -> None:
        response = await async_client.get(
            "/api/v1/reviews/listing/listing-1", headers=bearer(_foreign_token())
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Invalid token"
        assert body["code"] == "invalid_token"

    async def test_cookie_credential_is_accepted(
        self, async_client: AsyncClient, learner_token: str
    ) -> None:
        response = await async_client.get(
            "/api/v1/ratings/listing/listing-1", headers={"Cookie": f"token={learner_token}"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": True, "ratings": []}

    async def test_invalid_cookie_wins_over_valid_header(
        self, async_client: AsyncClient, learner_token: str
    ) -> None:
        response = await async_client.get(
            "/api/v1/ratings/listing/listing-1",
            headers={"Cookie": f"token={_foreign_token()}", **bearer(learner_token)},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Invalid token"

    async def test_guard_failure_returns_500_envelope(
        self, async_client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def explode(*_args, **_kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr("skillswap.api.deps.decode_access_token", explode)

        response = await async_client.get(
            "/api/v1/ratings/listing/listing-1", headers=bearer("anything")
        )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {
            "success": False,
            "message": "Internal server error",
            "code": "internal_error",
        }

    async def test_malformed_token_returns_500_envelope(self, async_client: AsyncClient) -> None:
        response = await async_client.get(
            "/api/v1/ratings/listing/listing-1", headers=bearer("not-a-jwt")
        )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {
            "success": False,
            "message": "Internal server error",
            "code": "internal_error",
        }
