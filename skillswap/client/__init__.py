"""Client-side flows that talk to the SkillSwap API."""

from skillswap.client.navigation import HistoryNavigator, LogNotifier, Navigator, Notifier
from skillswap.client.rating_review import (
    CompleteStep,
    InvalidTransitionError,
    RatingReviewFlow,
    RatingStep,
    ReviewStep,
    Step,
)
from skillswap.client.session import SessionContext, SessionUser
from skillswap.client.star_rating import StarRating, rating_label

__all__ = [
    "CompleteStep",
    "HistoryNavigator",
    "InvalidTransitionError",
    "LogNotifier",
    "Navigator",
    "Notifier",
    "RatingReviewFlow",
    "RatingStep",
    "ReviewStep",
    "SessionContext",
    "SessionUser",
    "StarRating",
    "Step",
    "rating_label",
]
