"""Unit tests for the rating and review services."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError
from skillswap.domain.services.ratings import DuplicateRatingError, RatingService
from skillswap.domain.services.reviews import DuplicateReviewError, ReviewService
from skillswap.infrastructure.db.models import Rating


@pytest.fixture
def mock_session():
    session = AsyncMock()
    session.add = MagicMock()
    return session


def _result(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


class TestRatingService:
    async def test_create_rating_persists_record(self, mock_session) -> None:
        mock_session.execute.return_value = _result(None)

        record = await RatingService(mock_session).create_rating(
            learner_id="learner1", teacher_id="teacher1", listing_id="listing-1", rating=4
        )

        assert isinstance(record, Rating)
        assert record.rating == 4
        mock_session.add.assert_called_once_with(record)
        mock_session.commit.assert_awaited_once()

    async def test_existing_rating_raises_duplicate(self, mock_session) -> None:
        mock_session.execute.return_value = _result(MagicMock(spec=Rating))

        with pytest.raises(DuplicateRatingError, match="already rated"):
            await RatingService(mock_session).create_rating(
                learner_id="learner1", teacher_id="teacher1", listing_id="listing-1", rating=4
            )

        mock_session.add.assert_not_called()

    async def test_integrity_error_is_reported_as_duplicate(self, mock_session) -> None:
        mock_session.execute.return_value = _result(None)
        mock_session.commit.side_effect = IntegrityError("insert", {}, Exception("unique"))

        with pytest.raises(DuplicateRatingError):
            await RatingService(mock_session).create_rating(
                learner_id="learner1", teacher_id="teacher1", listing_id="listing-1", rating=4
            )

        mock_session.rollback.assert_awaited_once()

    @pytest.mark.parametrize("value", [0, 6])
    async def test_out_of_range_rating_is_rejected(self, mock_session, value: int) -> None:
        with pytest.raises(ValueError):
            await RatingService(mock_session).create_rating(
                learner_id="learner1", teacher_id="teacher1", listing_id="listing-1", rating=value
            )

        mock_session.execute.assert_not_awaited()


class TestReviewService:
    async def test_create_review_strips_text(self, mock_session) -> None:
        mock_session.execute.return_value = _result(None)

        record = await ReviewService(mock_session).create_review(
            learner_id="learner1",
            teacher_id="teacher1",
            listing_id="listing-1",
            review_text="  Explained recursion really well  ",
            rating=5,
        )

        assert record.review_text == "Explained recursion really well"

    async def test_duplicate_review_raises(self, mock_session) -> None:
        mock_session.execute.return_value = _result("review-1")

        with pytest.raises(DuplicateReviewError):
            await ReviewService(mock_session).create_review(
                learner_id="learner1",
                teacher_id="teacher1",
                listing_id="listing-1",
                review_text="Explained recursion really well",
                rating=5,
            )

    async def test_short_review_is_rejected(self, mock_session) -> None:
        with pytest.raises(ValueError):
            await ReviewService(mock_session).create_review(
                learner_id="learner1",
                teacher_id="teacher1",
                listing_id="listing-1",
                review_text="   nine ch   ",
                rating=5,
            )
