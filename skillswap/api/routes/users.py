"""User routes - register, login, logout, profile."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from skillswap.api.deps import get_app_settings, get_current_identity, get_db_session
from skillswap.api.schemas.users import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    RegisterRequest,
    UserResponse,
)
from skillswap.core.config import Settings
from skillswap.core.errors import AuthenticationError, ConflictError, NotFoundError
from skillswap.domain import Identity
from skillswap.domain.services.users import (
    InvalidCredentialsError,
    UserExistsError,
    UserNotFoundError,
    UserService,
)

logger = structlog.get_logger()
router = APIRouter(prefix="/user", tags=["users"])


def _set_token_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=settings.access_token_ttl_seconds,
        httponly=True,
        samesite="strict",
        secure=settings.environment not in ("local", "test"),
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
)
async def register(
    payload: RegisterRequest,
    response: Response,
    session: AsyncSession = Depends(get_db_session),  # noqa: B008
    settings: Settings = Depends(get_app_settings),  # noqa: B008
) -> AuthResponse:
    service = UserService(session, settings)

    try:
        result = await service.register(
            fullname=payload.fullname,
            email=payload.email,
            password=payload.password,
            role=payload.role.value,
        )
    except UserExistsError as exc:
        raise ConflictError(str(exc), code="user_exists") from exc

    _set_token_cookie(response, result["token"], settings)
    return AuthResponse(
        message="Account created successfully",
        user=UserResponse(**result["user"]),
        token=result["token"],
    )


@router.post("/login", response_model=AuthResponse, summary="User login")
async def login(
    payload: LoginRequest,
    response: Response,
    session: AsyncSession = Depends(get_db_session),  # noqa: B008
    settings: Settings = Depends(get_app_settings),  # noqa: B008
) -> AuthResponse:
    """Authenticate and set the ``token`` cookie."""
    service = UserService(session, settings)

    try:
        result = await service.login(email=payload.email, password=payload.password)
    except InvalidCredentialsError as exc:
        raise AuthenticationError(str(exc), code="invalid_credentials") from exc

    _set_token_cookie(response, result["token"], settings)
    return AuthResponse(
        message=f"Welcome back {result['user']['fullname']}",
        user=UserResponse(**result["user"]),
        token=result["token"],
    )


@router.get("/logout", summary="Clear the session cookie")
async def logout(
    response: Response,
    settings: Settings = Depends(get_app_settings),  # noqa: B008
) -> dict:
    response.delete_cookie(settings.auth_cookie_name)
    return {"success": True, "message": "Logged out successfully"}


@router.get("/me", response_model=MeResponse, summary="Get current user")
async def get_me(
    identity: Identity = Depends(get_current_identity),  # noqa: B008
    session: AsyncSession = Depends(get_db_session),  # noqa: B008
) -> MeResponse:
    service = UserService(session)

    try:
        user = await service.get_user(identity.user_id)
    except UserNotFoundError as exc:
        raise NotFoundError(str(exc)) from exc

    return MeResponse(user=UserResponse(**user))
