from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import Field, StringConstraints, field_validator
from skillswap.domain.services.reviews import MAX_REVIEW_LENGTH, MIN_REVIEW_LENGTH

from .common import WireModel, flatten_reference
from .ratings import ListingId, UserId

ReviewText = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True, min_length=MIN_REVIEW_LENGTH, max_length=MAX_REVIEW_LENGTH
    ),
]


class ReviewCreate(WireModel):
    learner_id: UserId = Field(..., alias="learnerID")
    teacher_id: UserId = Field(..., alias="teacherID")
    listing_id: ListingId = Field(..., alias="listingID")
    review_text: ReviewText = Field(..., alias="reviewText")
    rating: int = Field(..., ge=1, le=5)


class ReviewOut(WireModel):
    id: str = Field(..., alias="_id")
    learner_id: str = Field(..., alias="learnerID")
    teacher_id: str = Field(..., alias="teacherID")
    listing_id: str = Field(..., alias="listingID")
    review_text: str = Field(..., alias="reviewText")
    rating: int
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @field_validator("learner_id", "teacher_id", mode="before")
    @classmethod
    def _flatten(cls, value):
        return flatten_reference(value)


class ReviewListResponse(WireModel):
    success: bool = True
    reviews: list[ReviewOut]


class ReviewCreateResponse(WireModel):
    success: bool = True
    message: str = "Review submitted successfully"
    review: ReviewOut
