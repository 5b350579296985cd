"""User registration and login."""

from __future__ import annotations

import structlog
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from skillswap.core.auth import Role, create_access_token
from skillswap.core.config import Settings, get_settings
from skillswap.infrastructure.db.models import UserModel

logger = structlog.get_logger()

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class UserError(Exception):
    """Base exception for user account errors."""


class UserExistsError(UserError):
    """Raised when attempting to register with existing email."""


class InvalidCredentialsError(UserError):
    """Raised when login credentials are invalid."""


class UserNotFoundError(UserError):
    """Raised when user is not found."""


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


class UserService:
    """Service for user accounts and credential issuance."""

    def __init__(self, session: AsyncSession, settings: Settings | None = None) -> None:
        self.session = session
        self.settings = settings or get_settings()

    async def register(
        self,
        *,
        fullname: str,
        email: str,
        password: str,
        role: str = "learner",
    ) -> dict:
        """
        Register a new user.

        Returns:
            dict with user data and an access token
        """
        await logger.ainfo("register_attempt", email=email, role=role)

        try:
            user_role = Role(role)
        except ValueError as exc:
            raise UserError(f"Invalid role: {role}") from exc

        user = UserModel(
            fullname=fullname,
            email=email.lower(),
            hashed_password=hash_password(password),
            role=user_role,
        )

        try:
            self.session.add(user)
            await self.session.commit()
            await self.session.refresh(user)
        except IntegrityError as exc:
            await self.session.rollback()
            await logger.awarning("register_duplicate_email", email=email)
            raise UserExistsError(f"User with email {email} already exists") from exc

        await logger.ainfo("register_success", user_id=user.id)
        return {"user": self._user_to_dict(user), "token": self._issue_token(user)}

    async def login(self, *, email: str, password: str) -> dict:
        await logger.ainfo("login_attempt", email=email)

        stmt = select(UserModel).where(UserModel.email == email.lower())
        result = await self.session.execute(stmt)
        user = result.scalar_one_or_none()

        if user is None or not verify_password(password, user.hashed_password):
            await logger.awarning("login_failed", email=email)
            raise InvalidCredentialsError("Incorrect email or password")

        await logger.ainfo("login_success", user_id=user.id)
        return {"user": self._user_to_dict(user), "token": self._issue_token(user)}

    async def get_user(self, user_id: str) -> dict:
        user = await self.session.get(UserModel, user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")
        return self._user_to_dict(user)

    def _issue_token(self, user: UserModel) -> str:
        return create_access_token(user.id, role=user.role.value, settings=self.settings)

    def _user_to_dict(self, user: UserModel) -> dict:
        return {
            "id": user.id,
            "fullname": user.fullname,
            "email": user.email,
            "role": user.role.value,
            "created_at": user.created_at,
        }
