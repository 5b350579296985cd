from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

import structlog

SIGN_IN_ROUTE = "/signin"
LEARNER_SESSIONS_ROUTE = "/sessions/learner"

logger = structlog.get_logger()


def rating_route(listing_id: str) -> str:
    return f"/rating/{listing_id}"


class Navigator(Protocol):
    def navigate(self, route: str, state: Mapping[str, Any] | None = None) -> None: ...


class Notifier(Protocol):
    """Toast-style user notifications."""

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


@dataclass(slots=True)
class Visit:
    route: str
    state: Mapping[str, Any] | None = None


@dataclass
class HistoryNavigator:
    """In-memory router keeping the visited routes."""

    history: list[Visit] = field(default_factory=list)

    def navigate(self, route: str, state: Mapping[str, Any] | None = None) -> None:
        logger.debug("navigate", route=route)
        self.history.append(Visit(route, state))

    @property
    def current(self) -> Visit | None:
        return self.history[-1] if self.history else None


class LogNotifier:
    """Notifier that writes toasts to the structured log."""

    def info(self, message: str) -> None:
        logger.info("toast", level="info", message=message)

    def success(self, message: str) -> None:
        logger.info("toast", level="success", message=message)

    def error(self, message: str) -> None:
        logger.warning("toast", level="error", message=message)
