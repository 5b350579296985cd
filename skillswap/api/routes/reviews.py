from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from skillswap.api.deps import get_current_identity, get_db_session, require_self
from skillswap.api.schemas.reviews import (
    ReviewCreate,
    ReviewCreateResponse,
    ReviewListResponse,
    ReviewOut,
)
from skillswap.core.errors import ConflictError
from skillswap.domain import Identity
from skillswap.domain.services.reviews import DuplicateReviewError, ReviewService
from skillswap.infrastructure.db.models import Review

router = APIRouter(prefix="/reviews", tags=["Reviews"])


def to_review_out(record: Review) -> ReviewOut:
    return ReviewOut(
        id=record.id,
        learner_id=record.learner_id,
        teacher_id=record.teacher_id,
        listing_id=record.listing_id,
        review_text=record.review_text,
        rating=record.rating,
        created_at=record.created_at,
    )


@router.get("/listing/{listing_id}", response_model=ReviewListResponse)
async def list_listing_reviews(
    listing_id: str,
    session: AsyncSession = Depends(get_db_session),  # noqa: B008
    _: Identity = Depends(get_current_identity),  # noqa: B008
) -> ReviewListResponse:
    records = await ReviewService(session).list_for_listing(listing_id)
    return ReviewListResponse(reviews=[to_review_out(record) for record in records])


@router.post(
    "/create",
    response_model=ReviewCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_review(
    payload: ReviewCreate,
    session: AsyncSession = Depends(get_db_session),  # noqa: B008
    identity: Identity = Depends(get_current_identity),  # noqa: B008
) -> ReviewCreateResponse:
    """Attach a written review to a listing the learner attended."""
    require_self(identity, payload.learner_id)

    try:
        record = await ReviewService(session).create_review(
            learner_id=payload.learner_id,
            teacher_id=payload.teacher_id,
            listing_id=payload.listing_id,
            review_text=payload.review_text,
            rating=payload.rating,
        )
    except DuplicateReviewError as exc:
        raise ConflictError(str(exc), code="already_reviewed") from exc

    return ReviewCreateResponse(review=to_review_out(record))
