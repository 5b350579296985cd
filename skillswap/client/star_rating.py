from __future__ import annotations

from dataclasses import dataclass

MAX_STARS = 5

RATING_LABELS: dict[int, str] = {
    1: "Poor - Not satisfied",
    2: "Fair - Below expectations",
    3: "Good - Met expectations",
    4: "Very Good - Above expectations",
    5: "Excellent - Outstanding experience",
}


def rating_label(value: int) -> str:
    return RATING_LABELS.get(value, "")


def _check(value: int) -> int:
    if not 0 <= value <= MAX_STARS:
        raise ValueError(f"Star value must be between 0 and {MAX_STARS}, got {value}")
    return value


@dataclass
class StarRating:
    """Five-star picker: a committed value plus a transient hover preview."""

    committed: int = 0
    hovered: int = 0

    def select(self, value: int) -> None:
        self.committed = _check(value)

    def hover(self, value: int) -> None:
        self.hovered = _check(value)

    def leave(self) -> None:
        self.hovered = 0

    @property
    def displayed(self) -> int:
        return self.hovered or self.committed

    @property
    def label(self) -> str:
        return rating_label(self.displayed)

    def filled(self) -> list[bool]:
        """Fill state of each star, left to right."""
        return [star <= self.displayed for star in range(1, MAX_STARS + 1)]
