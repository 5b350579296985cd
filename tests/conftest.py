from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from skillswap.api.deps import get_db_session
from skillswap.api.main import create_app
from skillswap.core.auth import Role, create_access_token
from skillswap.core.config import Settings
from skillswap.infrastructure.db.base import Base
from skillswap.infrastructure.db.models import UserModel

from tests.utils import TEST_SECRET


@pytest.fixture()
def settings() -> Settings:
    return Settings(SECRET_KEY=TEST_SECRET, APP_ENV="test", DATABASE_URL="sqlite+aiosqlite://")


@pytest.fixture()
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture()
async def session_factory() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture()
async def db(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    """Provide a database session for tests that need direct DB access."""
    async with session_factory() as session:
        yield session


@pytest.fixture()
async def async_client(
    app: FastAPI, session_factory: async_sessionmaker[AsyncSession]
) -> AsyncIterator[AsyncClient]:
    """Async HTTP client bound to the app and the in-memory database."""

    async def override_db_session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


async def _add_user(session: AsyncSession, user_id: str, role: Role) -> UserModel:
    user = UserModel(
        id=user_id,
        fullname=f"{role.value.title()} {user_id}",
        email=f"{user_id}@example.com",
        hashed_password="not-used",
        role=role,
    )
    session.add(user)
    await session.commit()
    return user


@pytest.fixture()
async def learner(db: AsyncSession) -> UserModel:
    return await _add_user(db, "learner1", Role.LEARNER)


@pytest.fixture()
async def other_learner(db: AsyncSession) -> UserModel:
    return await _add_user(db, "learner2", Role.LEARNER)


@pytest.fixture()
async def teacher(db: AsyncSession) -> UserModel:
    return await _add_user(db, "teacher1", Role.TEACHER)


@pytest.fixture()
def learner_token(learner: UserModel, settings: Settings) -> str:
    return create_access_token(learner.id, role="learner", settings=settings)


@pytest.fixture()
def other_learner_token(other_learner: UserModel, settings: Settings) -> str:
    return create_access_token(other_learner.id, role="learner", settings=settings)
