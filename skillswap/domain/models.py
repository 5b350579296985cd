from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class Identity:
    """Request-scoped claim attached by the auth guard."""

    user_id: str


@dataclass(slots=True)
class RatingSummary:
    """Aggregate of a teacher's ratings."""

    teacher_id: str
    average_rating: float
    total_ratings: int
    last_rated_at: datetime | None = None
