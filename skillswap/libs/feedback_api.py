"""
Async client for the ratings and reviews REST API.

Each call opens a short-lived ``httpx.AsyncClient`` and authenticates with
the bearer token held by the caller's ``SessionContext``. Failures are
raised as ``FeedbackApiError`` carrying the server's structured ``code``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import httpx
import structlog
from pydantic import ValidationError
from skillswap.api.schemas.ratings import RatingOut
from skillswap.api.schemas.reviews import ReviewOut
from skillswap.core.config import get_settings

if TYPE_CHECKING:
    from skillswap.client.session import SessionContext

logger = structlog.get_logger()

ALREADY_RATED = "already_rated"
ALREADY_REVIEWED = "already_reviewed"


class FeedbackApiError(Exception):
    """Raised when a call fails or the server reports ``success: false``."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class FeedbackApi(Protocol):
    """Protocol for the feedback API (allows fakes in tests)."""

    async def list_listing_ratings(self, listing_id: str) -> list[RatingOut]: ...

    async def list_listing_reviews(self, listing_id: str) -> list[ReviewOut]: ...

    async def create_rating(
        self, *, learner_id: str, teacher_id: str, listing_id: str, rating: int
    ) -> RatingOut: ...

    async def create_review(
        self,
        *,
        learner_id: str,
        teacher_id: str,
        listing_id: str,
        review_text: str,
        rating: int,
    ) -> ReviewOut | None: ...


class FeedbackApiClient:
    """httpx implementation of ``FeedbackApi``."""

    def __init__(
        self,
        session: SessionContext,
        *,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.session = session
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = (
            timeout_seconds if timeout_seconds is not None else settings.api_timeout_seconds
        )
        self._transport = transport

    async def list_listing_ratings(self, listing_id: str) -> list[RatingOut]:
        data = await self._request("GET", f"/api/v1/ratings/listing/{listing_id}")
        return self._parse_list(data, "ratings", RatingOut)

    async def list_listing_reviews(self, listing_id: str) -> list[ReviewOut]:
        data = await self._request("GET", f"/api/v1/reviews/listing/{listing_id}")
        return self._parse_list(data, "reviews", ReviewOut)

    async def create_rating(
        self, *, learner_id: str, teacher_id: str, listing_id: str, rating: int
    ) -> RatingOut:
        data = await self._request(
            "POST",
            "/api/v1/ratings/create",
            json={
                "learnerID": learner_id,
                "teacherID": teacher_id,
                "listingID": listing_id,
                "rating": rating,
            },
        )
        if not isinstance(data.get("rating"), dict):
            raise FeedbackApiError("Failed to submit rating")
        return self._parse_item(data["rating"], RatingOut)

    async def create_review(
        self,
        *,
        learner_id: str,
        teacher_id: str,
        listing_id: str,
        review_text: str,
        rating: int,
    ) -> ReviewOut | None:
        data = await self._request(
            "POST",
            "/api/v1/reviews/create",
            json={
                "learnerID": learner_id,
                "teacherID": teacher_id,
                "listingID": listing_id,
                "reviewText": review_text,
                "rating": rating,
            },
        )
        review = data.get("review")
        return self._parse_item(review, ReviewOut) if isinstance(review, dict) else None

    async def _request(
        self, method: str, path: str, *, json: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        headers = {"Accept": "application/json"}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.request(method, path, headers=headers, json=json)
        except httpx.HTTPError as exc:
            await logger.awarning("feedback_api_request_error", path=path, error=str(exc))
            raise FeedbackApiError(f"Request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise FeedbackApiError(
                f"Unexpected response from server ({response.status_code})",
                status_code=response.status_code,
            ) from exc

        if not isinstance(data, dict) or not data.get("success"):
            body = data if isinstance(data, dict) else {}
            await logger.ainfo(
                "feedback_api_rejected",
                path=path,
                status_code=response.status_code,
                code=body.get("code"),
            )
            raise FeedbackApiError(
                body.get("message") or "Request failed",
                code=body.get("code"),
                status_code=response.status_code,
            )
        return data

    def _parse_list(self, data: dict[str, Any], key: str, model: Any) -> list[Any]:
        items = data.get(key)
        if not isinstance(items, list):
            raise FeedbackApiError(f"Response is missing '{key}'")
        return [self._parse_item(item, model) for item in items]

    def _parse_item(self, item: Any, model: Any) -> Any:
        try:
            return model.model_validate(item)
        except ValidationError as exc:
            raise FeedbackApiError(f"Malformed {model.__name__} payload") from exc
