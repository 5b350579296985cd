"""Review persistence."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from skillswap.infrastructure.db.models import Review

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger(__name__)

MIN_REVIEW_LENGTH = 10
MAX_REVIEW_LENGTH = 500


class DuplicateReviewError(Exception):
    """Raised when a learner reviews the same listing twice."""


class ReviewService:
    """Service for learner reviews."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_for_listing(self, listing_id: str) -> list[Review]:
        stmt = (
            select(Review)
            .where(Review.listing_id == listing_id)
            .order_by(Review.created_at.desc(), Review.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create_review(
        self,
        *,
        learner_id: str,
        teacher_id: str,
        listing_id: str,
        review_text: str,
        rating: int,
    ) -> Review:
        text = review_text.strip()
        if not MIN_REVIEW_LENGTH <= len(text) <= MAX_REVIEW_LENGTH:
            raise ValueError(
                f"Review must be between {MIN_REVIEW_LENGTH} and {MAX_REVIEW_LENGTH} characters"
            )

        existing = await self.session.execute(
            select(Review.id).where(
                Review.learner_id == learner_id, Review.listing_id == listing_id
            )
        )
        if existing.scalar_one_or_none() is not None:
            await logger.awarning(
                "review_duplicate", learner_id=learner_id, listing_id=listing_id
            )
            raise DuplicateReviewError("You have already reviewed this listing")

        record = Review(
            learner_id=learner_id,
            teacher_id=teacher_id,
            listing_id=listing_id,
            review_text=text,
            rating=rating,
        )
        try:
            self.session.add(record)
            await self.session.commit()
            await self.session.refresh(record)
        except IntegrityError as exc:
            await self.session.rollback()
            raise DuplicateReviewError("You have already reviewed this listing") from exc

        await logger.ainfo(
            "review_created",
            review_id=record.id,
            learner_id=learner_id,
            listing_id=listing_id,
            length=len(text),
        )
        return record
