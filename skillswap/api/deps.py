from __future__ import annotations

from collections.abc import AsyncIterator

import structlog
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from skillswap.core.auth import TokenError, decode_access_token, extract_token
from skillswap.core.config import Settings, get_settings
from skillswap.core.errors import (
    ApiError,
    AuthenticationError,
    ForbiddenError,
    InternalServerError,
    InvalidTokenError,
)
from skillswap.domain import Identity
from skillswap.infrastructure.db.session import get_session

logger = structlog.get_logger()


def get_app_settings(request: Request) -> Settings:
    """Settings injected into the application at startup."""
    settings = getattr(request.app.state, "settings", None)
    return settings or get_settings()


async def get_current_identity(
    request: Request,
    settings: Settings = Depends(get_app_settings),  # noqa: B008
) -> Identity:
    """Resolve the caller from the ``token`` cookie or a bearer header.

    Rejections are raised as ``ApiError`` so the app-wide handler renders
    the ``{success, message}`` envelope. Anything unexpected becomes a 500.
    """
    try:
        token = extract_token(
            request.cookies,
            request.headers.get("authorization"),
            cookie_name=settings.auth_cookie_name,
        )
        if not token:
            raise AuthenticationError("User not authenticated")

        try:
            payload = decode_access_token(token, settings=settings)
        except TokenError as exc:
            await logger.ainfo("auth_token_invalid", reason=str(exc.__cause__ or exc))
            raise InvalidTokenError("Invalid token") from exc

        identity = Identity(user_id=str(payload["userId"]))
    except ApiError:
        raise
    except Exception as exc:
        logger.exception("auth_guard_failed")
        raise InternalServerError() from exc

    request.state.identity = identity
    structlog.contextvars.bind_contextvars(user_id=identity.user_id)
    return identity


def require_self(identity: Identity, learner_id: str) -> None:
    """Reject submissions made on behalf of another learner."""
    if identity.user_id != learner_id:
        raise ForbiddenError("You can only submit feedback as yourself")


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """Provide an async SQLAlchemy session for API handlers."""
    async for session in get_session():
        yield session
