"""
Rate, review, complete: the learner's post-session feedback flow.

The flow is a small state machine over three explicit step variants.
``ReviewStep`` and ``CompleteStep`` always carry the rating the learner
submitted (or had already submitted), so no state ever holds a half-known
rating.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

import structlog
from skillswap.api.schemas.common import flatten_reference
from skillswap.api.schemas.ratings import RatingOut
from skillswap.client.navigation import (
    LEARNER_SESSIONS_ROUTE,
    SIGN_IN_ROUTE,
    LogNotifier,
    Navigator,
    Notifier,
    rating_route,
)
from skillswap.client.session import SessionContext, SessionUser
from skillswap.client.star_rating import StarRating
from skillswap.domain.services.reviews import MAX_REVIEW_LENGTH, MIN_REVIEW_LENGTH
from skillswap.libs.feedback_api import (
    ALREADY_RATED,
    ALREADY_REVIEWED,
    FeedbackApi,
    FeedbackApiError,
)

logger = structlog.get_logger(__name__)

LEARNER_ROLE = "learner"


@dataclass(frozen=True, slots=True)
class RatingStep:
    """Awaiting a star rating. ``existing`` is set once a prior rating is found."""

    number: ClassVar[int] = 1
    existing: RatingOut | None = None


@dataclass(frozen=True, slots=True)
class ReviewStep:
    number: ClassVar[int] = 2
    submitted_rating: RatingOut


@dataclass(frozen=True, slots=True)
class CompleteStep:
    number: ClassVar[int] = 3
    submitted_rating: RatingOut


Step = RatingStep | ReviewStep | CompleteStep


class InvalidTransitionError(Exception):
    """Raised when an action is invoked from a step that does not offer it."""


def resolve_participants(
    state: Mapping[str, Any], user: SessionUser | None
) -> tuple[str | None, str | None]:
    """Work out (teacher_id, learner_id) from navigation state.

    Explicit ids win over the ``sessionData`` record, whose references may be
    populated objects. The learner falls back to the signed-in user.
    """
    session_data = state.get("sessionData") or {}
    teacher_id = state.get("teacherID") or flatten_reference(session_data.get("teacherID"))
    learner_id = state.get("learnerID") or flatten_reference(session_data.get("learnerID"))
    if not learner_id and user is not None:
        learner_id = user.id
    return (teacher_id or None, learner_id or None)


class RatingReviewFlow:
    """Drives the rating page for one listing."""

    def __init__(
        self,
        listing_id: str | None,
        *,
        session: SessionContext,
        api: FeedbackApi,
        navigator: Navigator,
        notifier: Notifier | None = None,
        location_state: Mapping[str, Any] | None = None,
    ) -> None:
        self.listing_id = listing_id or ""
        self.session = session
        self.api = api
        self.navigator = navigator
        self.notifier = notifier or LogNotifier()
        self.location_state = dict(location_state or {})
        self.teacher_id, self.learner_id = resolve_participants(
            self.location_state, session.user
        )

        self.step: Step = RatingStep()
        self.stars = StarRating()
        self.review_text = ""
        self.review_error: str | None = None
        self.is_submitting = False

    # -- lifecycle -----------------------------------------------------------

    async def mount(self) -> bool:
        """Check access, then restore any feedback already on record.

        Returns False when the user was redirected away.
        """
        user = self.session.user
        if user is None:
            self.notifier.error("Please sign in to rate sessions")
            self.navigator.navigate(
                SIGN_IN_ROUTE,
                state={
                    "returnUrl": rating_route(self.listing_id),
                    "returnState": self.location_state or None,
                },
            )
            return False

        if user.role != LEARNER_ROLE:
            self.notifier.error("Only learners can rate sessions")
            self.navigator.navigate(LEARNER_SESSIONS_ROUTE)
            return False

        if not self.listing_id:
            self.notifier.error("Invalid skill listing")
            self.navigator.navigate(LEARNER_SESSIONS_ROUTE)
            return False

        await self.check_existing_rating()
        return True

    async def check_existing_rating(self) -> None:
        user = self.session.user
        if user is None:
            return

        try:
            ratings = await self.api.list_listing_ratings(self.listing_id)
        except FeedbackApiError as exc:
            # Lookup failures leave the learner on the rating step
            await logger.awarning(
                "existing_rating_lookup_failed", listing_id=self.listing_id, error=exc.message
            )
            return

        existing = next((r for r in ratings if r.learner_id == user.id), None)
        if existing is None:
            return

        self.step = RatingStep(existing=existing)
        self.stars.select(existing.rating)
        self.notifier.info("You have already rated this listing. You can optionally add a review.")
        await self.check_existing_review(existing)

    async def check_existing_review(self, submitted: RatingOut) -> None:
        try:
            reviews = await self.api.list_listing_reviews(self.listing_id)
        except FeedbackApiError as exc:
            await logger.awarning(
                "existing_review_lookup_failed", listing_id=self.listing_id, error=exc.message
            )
            self.step = ReviewStep(submitted)
            return

        if any(review.learner_id == self.learner_id for review in reviews):
            self.notifier.success("Rating submitted! You have already reviewed this listing.")
            self.step = CompleteStep(submitted)
        else:
            self.step = ReviewStep(submitted)

    # -- rating step ---------------------------------------------------------

    @property
    def can_submit_rating(self) -> bool:
        return (
            isinstance(self.step, RatingStep)
            and self.step.existing is None
            and self.stars.committed > 0
            and not self.is_submitting
        )

    async def submit_rating(self) -> None:
        step = self._require(RatingStep, "submit a rating")
        if self.is_submitting:
            return

        if self.stars.committed == 0:
            self.notifier.error("Please select a rating")
            return

        if not self.teacher_id or not self.learner_id:
            self.notifier.error("Missing required information")
            return

        if step.existing is not None:
            self.notifier.info(
                "You have already rated this listing. You can modify your review below."
            )
            self.step = ReviewStep(step.existing)
            return

        self.is_submitting = True
        try:
            rating = await self.api.create_rating(
                learner_id=self.learner_id,
                teacher_id=self.teacher_id,
                listing_id=self.listing_id,
                rating=self.stars.committed,
            )
        except FeedbackApiError as exc:
            if exc.code == ALREADY_RATED:
                self.notifier.info(
                    "You have already rated this listing. Checking your existing rating..."
                )
                await self.check_existing_rating()
            else:
                await logger.awarning(
                    "rating_submission_failed",
                    listing_id=self.listing_id,
                    code=exc.code,
                    error=exc.message,
                )
                self.notifier.error(exc.message or "Failed to submit rating")
            return
        finally:
            self.is_submitting = False

        self.notifier.success("Rating submitted successfully!")
        self.step = ReviewStep(rating)

    def continue_to_review(self) -> None:
        step = self._require(RatingStep, "continue to the review")
        if step.existing is None:
            raise InvalidTransitionError("No rating has been submitted yet")
        self.step = ReviewStep(step.existing)

    # -- review step ---------------------------------------------------------

    def set_review_text(self, text: str) -> None:
        self.review_text = text
        self.review_error = None

    @property
    def review_hint(self) -> str | None:
        """Inline feedback shown under the text box while typing."""
        if self.review_error:
            return self.review_error
        if 0 < len(self.review_text.strip()) < MIN_REVIEW_LENGTH:
            return f"(Minimum {MIN_REVIEW_LENGTH} characters)"
        return None

    @property
    def character_count(self) -> str:
        return f"{len(self.review_text)}/{MAX_REVIEW_LENGTH} characters"

    @property
    def can_submit_review(self) -> bool:
        length = len(self.review_text.strip())
        return (
            isinstance(self.step, ReviewStep)
            and MIN_REVIEW_LENGTH <= length <= MAX_REVIEW_LENGTH
            and not self.is_submitting
        )

    async def submit_review(self) -> None:
        step = self._require(ReviewStep, "submit a review")
        if self.is_submitting:
            return

        text = self.review_text.strip()
        if len(text) < MIN_REVIEW_LENGTH:
            self.review_error = f"(Minimum {MIN_REVIEW_LENGTH} characters)"
            self.notifier.error(f"Review must be at least {MIN_REVIEW_LENGTH} characters long")
            return
        if len(text) > MAX_REVIEW_LENGTH:
            self.review_error = f"(Maximum {MAX_REVIEW_LENGTH} characters)"
            self.notifier.error(f"Review must be at most {MAX_REVIEW_LENGTH} characters long")
            return

        submitted = step.submitted_rating
        self.is_submitting = True
        try:
            await self.api.create_review(
                learner_id=self.learner_id or submitted.learner_id,
                teacher_id=self.teacher_id or submitted.teacher_id,
                listing_id=self.listing_id,
                review_text=text,
                rating=submitted.rating,
            )
        except FeedbackApiError as exc:
            if exc.code == ALREADY_REVIEWED:
                self.notifier.info("You have already reviewed this listing.")
                self.step = CompleteStep(submitted)
            else:
                await logger.awarning(
                    "review_submission_failed",
                    listing_id=self.listing_id,
                    code=exc.code,
                    error=exc.message,
                )
                self.notifier.error(exc.message or "Failed to submit review")
            return
        finally:
            self.is_submitting = False

        self.notifier.success("Review submitted successfully!")
        self.navigator.navigate(LEARNER_SESSIONS_ROUTE)

    def skip_review(self) -> None:
        step = self._require(ReviewStep, "skip the review")
        self.step = CompleteStep(step.submitted_rating)

    # -- any step ------------------------------------------------------------

    def back_to_sessions(self) -> None:
        self.navigator.navigate(LEARNER_SESSIONS_ROUTE)

    def _require(self, step_type: type, action: str) -> Any:
        if not isinstance(self.step, step_type):
            raise InvalidTransitionError(
                f"Cannot {action} from step {self.step.number} ({type(self.step).__name__})"
            )
        return self.step
