from __future__ import annotations

from datetime import UTC, datetime, timedelta
from enum import Enum

import jwt
from skillswap.core.config import Settings, get_settings


class TokenError(Exception):
    """Raised when a token cannot be decoded or validated."""


class Role(str, Enum):
    LEARNER = "learner"
    TEACHER = "teacher"

    @classmethod
    def contains(cls, value: str) -> bool:
        return value in {role.value for role in cls}


def create_access_token(
    user_id: str,
    *,
    role: str,
    expires_delta: timedelta | None = None,
    settings: Settings | None = None,
) -> str:
    """Generate a signed JWT carrying the ``userId`` claim."""
    settings = settings or get_settings()

    if role not in settings.allowed_roles:
        raise TokenError(f"Unsupported role: {role}")

    now = datetime.now(UTC)
    ttl = expires_delta or timedelta(seconds=settings.access_token_ttl_seconds)
    payload = {
        "userId": user_id,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, *, settings: Settings | None = None) -> dict:
    """Verify signature and expiry, returning the payload.

    A bad signature, an expired token or a payload without a ``userId``
    claim raises ``TokenError``. A string that is not a JWT at all raises
    ``jwt.DecodeError`` unchanged, and callers treat it as an unexpected failure.
    """
    settings = settings or get_settings()

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp"]},
        )
    except jwt.InvalidSignatureError as exc:
        raise TokenError("Invalid token") from exc
    except jwt.DecodeError:
        raise
    except jwt.PyJWTError as exc:
        raise TokenError("Invalid token") from exc

    if not payload or not payload.get("userId"):
        raise TokenError("Invalid token")
    return payload


def extract_token(
    cookies: dict[str, str], authorization: str | None, *, cookie_name: str = "token"
) -> str | None:
    """Return the credential from the cookie, falling back to a bearer header."""
    token = cookies.get(cookie_name)
    if token:
        return token

    if authorization and authorization.startswith("Bearer "):
        return authorization[len("Bearer ") :] or None
    return None
