from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import Field, StringConstraints, field_validator

from .common import WireModel, flatten_reference

ListingId = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=64)]
UserId = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=32)]


class RatingCreate(WireModel):
    learner_id: UserId = Field(..., alias="learnerID")
    teacher_id: UserId = Field(..., alias="teacherID")
    listing_id: ListingId = Field(..., alias="listingID")
    rating: int = Field(..., ge=1, le=5, description="Star rating between 1 and 5")


class RatingOut(WireModel):
    id: str = Field(..., alias="_id")
    learner_id: str = Field(..., alias="learnerID")
    teacher_id: str = Field(..., alias="teacherID")
    listing_id: str = Field(..., alias="listingID")
    rating: int
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @field_validator("learner_id", "teacher_id", mode="before")
    @classmethod
    def _flatten(cls, value):
        return flatten_reference(value)


class RatingListResponse(WireModel):
    success: bool = True
    ratings: list[RatingOut]


class RatingCreateResponse(WireModel):
    success: bool = True
    message: str = "Rating submitted successfully"
    rating: RatingOut


class RatingSummaryResponse(WireModel):
    success: bool = True
    teacher_id: str = Field(..., alias="teacherID")
    average_rating: float = Field(..., alias="averageRating")
    total_ratings: int = Field(..., alias="totalRatings")
    last_rated_at: datetime | None = Field(default=None, alias="lastRatedAt")
