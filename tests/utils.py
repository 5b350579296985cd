from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fastapi import FastAPI
from starlette.requests import Request

TEST_SECRET = "test-secret-key"


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def rating_payload(
    learner_id: str = "learner1",
    teacher_id: str = "teacher1",
    listing_id: str = "listing-1",
    rating: int = 4,
) -> dict[str, Any]:
    return {
        "learnerID": learner_id,
        "teacherID": teacher_id,
        "listingID": listing_id,
        "rating": rating,
    }


def review_payload(
    learner_id: str = "learner1",
    teacher_id: str = "teacher1",
    listing_id: str = "listing-1",
    review_text: str = "Clear explanations and lots of practice.",
    rating: int = 4,
) -> dict[str, Any]:
    return {
        "learnerID": learner_id,
        "teacherID": teacher_id,
        "listingID": listing_id,
        "reviewText": review_text,
        "rating": rating,
    }


def make_request(app: FastAPI, headers: Mapping[str, str] | None = None) -> Request:
    """Build a bare ASGI request for exercising dependencies directly."""
    raw_headers = [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in (headers or {}).items()
    ]
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "query_string": b"",
        "headers": raw_headers,
        "app": app,
    }
    return Request(scope)


class RecordingNotifier:
    """Collects toasts as (level, message) pairs."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def levels(self) -> list[str]:
        return [level for level, _ in self.messages]

    def texts(self) -> list[str]:
        return [message for _, message in self.messages]
