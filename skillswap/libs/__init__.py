"""Shared library helpers."""

from skillswap.libs.feedback_api import (
    ALREADY_RATED,
    ALREADY_REVIEWED,
    FeedbackApi,
    FeedbackApiClient,
    FeedbackApiError,
)

__all__ = [
    "ALREADY_RATED",
    "ALREADY_REVIEWED",
    "FeedbackApi",
    "FeedbackApiClient",
    "FeedbackApiError",
]
