from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from skillswap.api.deps import get_current_identity, get_db_session, require_self
from skillswap.api.schemas.ratings import (
    RatingCreate,
    RatingCreateResponse,
    RatingListResponse,
    RatingOut,
    RatingSummaryResponse,
)
from skillswap.core.errors import ConflictError
from skillswap.domain import Identity
from skillswap.domain.services.ratings import DuplicateRatingError, RatingService
from skillswap.infrastructure.db.models import Rating

router = APIRouter(prefix="/ratings", tags=["Ratings"])


def to_rating_out(record: Rating) -> RatingOut:
    return RatingOut(
        id=record.id,
        learner_id=record.learner_id,
        teacher_id=record.teacher_id,
        listing_id=record.listing_id,
        rating=record.rating,
        created_at=record.created_at,
    )


@router.get("/listing/{listing_id}", response_model=RatingListResponse)
async def list_listing_ratings(
    listing_id: str,
    session: AsyncSession = Depends(get_db_session),  # noqa: B008
    _: Identity = Depends(get_current_identity),  # noqa: B008
) -> RatingListResponse:
    """Return every rating left on a listing, newest first."""
    records = await RatingService(session).list_for_listing(listing_id)
    return RatingListResponse(ratings=[to_rating_out(record) for record in records])


@router.post(
    "/create",
    response_model=RatingCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_rating(
    payload: RatingCreate,
    session: AsyncSession = Depends(get_db_session),  # noqa: B008
    identity: Identity = Depends(get_current_identity),  # noqa: B008
) -> RatingCreateResponse:
    """Rate a listing; a learner may rate each listing once."""
    require_self(identity, payload.learner_id)

    try:
        record = await RatingService(session).create_rating(
            learner_id=payload.learner_id,
            teacher_id=payload.teacher_id,
            listing_id=payload.listing_id,
            rating=payload.rating,
        )
    except DuplicateRatingError as exc:
        raise ConflictError(str(exc), code="already_rated") from exc

    return RatingCreateResponse(rating=to_rating_out(record))


@router.get("/teacher/{teacher_id}/summary", response_model=RatingSummaryResponse)
async def teacher_rating_summary(
    teacher_id: str,
    session: AsyncSession = Depends(get_db_session),  # noqa: B008
    _: Identity = Depends(get_current_identity),  # noqa: B008
) -> RatingSummaryResponse:
    summary = await RatingService(session).summary_for_teacher(teacher_id)
    return RatingSummaryResponse(
        teacher_id=summary.teacher_id,
        average_rating=summary.average_rating,
        total_ratings=summary.total_ratings,
        last_rated_at=summary.last_rated_at,
    )
