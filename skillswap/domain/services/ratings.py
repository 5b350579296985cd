"""Rating persistence and aggregation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from skillswap.domain.models import RatingSummary
from skillswap.infrastructure.db.models import Rating

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger(__name__)


class DuplicateRatingError(Exception):
    """Raised when a learner rates the same listing twice."""


class RatingService:
    """Service for learner ratings."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_for_listing(self, listing_id: str) -> list[Rating]:
        stmt = (
            select(Rating)
            .where(Rating.listing_id == listing_id)
            .order_by(Rating.created_at.desc(), Rating.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_for_learner(self, learner_id: str, listing_id: str) -> Rating | None:
        stmt = select(Rating).where(
            Rating.learner_id == learner_id, Rating.listing_id == listing_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_rating(
        self,
        *,
        learner_id: str,
        teacher_id: str,
        listing_id: str,
        rating: int,
    ) -> Rating:
        """Persist a rating, enforcing one rating per learner and listing."""
        if not 1 <= rating <= 5:
            raise ValueError(f"Rating must be between 1 and 5, got {rating}")

        if await self.find_for_learner(learner_id, listing_id) is not None:
            await logger.awarning(
                "rating_duplicate", learner_id=learner_id, listing_id=listing_id
            )
            raise DuplicateRatingError("You have already rated this listing")

        record = Rating(
            learner_id=learner_id,
            teacher_id=teacher_id,
            listing_id=listing_id,
            rating=rating,
        )
        try:
            self.session.add(record)
            await self.session.commit()
            await self.session.refresh(record)
        except IntegrityError as exc:
            # Lost a race with a concurrent submission for the same pair
            await self.session.rollback()
            raise DuplicateRatingError("You have already rated this listing") from exc

        await logger.ainfo(
            "rating_created",
            rating_id=record.id,
            learner_id=learner_id,
            teacher_id=teacher_id,
            listing_id=listing_id,
            rating=rating,
        )
        return record

    async def summary_for_teacher(self, teacher_id: str) -> RatingSummary:
        stmt = select(
            func.count(Rating.id).label("total"),
            func.avg(Rating.rating).label("average"),
            func.max(Rating.created_at).label("last_rated_at"),
        ).where(Rating.teacher_id == teacher_id)
        row = (await self.session.execute(stmt)).first()

        total = row.total if row else 0
        return RatingSummary(
            teacher_id=teacher_id,
            average_rating=round(float(row.average or 0), 2) if row else 0.0,
            total_ratings=total or 0,
            last_rated_at=row.last_rated_at if row else None,
        )
