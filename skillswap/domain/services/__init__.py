"""Domain services."""

from skillswap.domain.services.ratings import DuplicateRatingError, RatingService
from skillswap.domain.services.reviews import DuplicateReviewError, ReviewService
from skillswap.domain.services.users import (
    InvalidCredentialsError,
    UserExistsError,
    UserNotFoundError,
    UserService,
)

__all__ = [
    "DuplicateRatingError",
    "DuplicateReviewError",
    "InvalidCredentialsError",
    "RatingService",
    "ReviewService",
    "UserExistsError",
    "UserNotFoundError",
    "UserService",
]
