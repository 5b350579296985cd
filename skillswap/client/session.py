from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class SessionUser:
    """The signed-in user as known to the client."""

    id: str
    role: str
    fullname: str = ""


@dataclass(slots=True)
class SessionContext:
    """Credential and user held by the client for the current session."""

    user: SessionUser | None = None
    token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and bool(self.token)

    @classmethod
    def from_auth_response(cls, payload: dict[str, Any]) -> SessionContext:
        """Build a session from the body returned by the login endpoint."""
        user = payload.get("user") or {}
        return cls(
            user=SessionUser(
                id=str(user["_id"]),
                role=str(user.get("role", "")),
                fullname=str(user.get("fullname", "")),
            ),
            token=payload.get("token"),
        )

    def clear(self) -> None:
        self.user = None
        self.token = None
