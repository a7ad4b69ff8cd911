from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from evalapi.api.main import create_app
from evalapi.core.auth import Role, TokenService
from evalapi.core.config import Settings
from evalapi.domain import Identity
from evalapi.domain.services import PasswordHasher
from evalapi.infrastructure.db import Database
from evalapi.infrastructure.repositories import SqlUserRepository


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'evaluations.db'}",
        jwt_secret="test-secret",
        jwt_expires_in="7d",
        bcrypt_rounds=4,
        json_logs=False,
    )


@pytest.fixture()
async def database(settings: Settings) -> AsyncIterator[Database]:
    db = Database.from_settings(settings)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture()
def app(settings: Settings, database: Database) -> FastAPI:
    return create_app(settings, database=database)


@pytest.fixture()
async def async_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client bound to the test application."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture()
async def session(database: Database) -> AsyncIterator[AsyncSession]:
    """Provide a database session for tests that need direct DB access."""
    async with database.session_factory() as db_session:
        yield db_session


@pytest.fixture()
def token_service(settings: Settings) -> TokenService:
    return TokenService(settings)


@pytest.fixture()
def hasher(settings: Settings) -> PasswordHasher:
    return PasswordHasher(rounds=settings.bcrypt_rounds)


@pytest.fixture()
async def alice(session: AsyncSession) -> Identity:
    return await SqlUserRepository(session).create(
        email="alice@example.com", password_hash="unused", name="Alice", role=Role.USER
    )


@pytest.fixture()
async def bob(session: AsyncSession) -> Identity:
    return await SqlUserRepository(session).create(
        email="bob@example.com", password_hash="unused", name="Bob", role=Role.USER
    )


@pytest.fixture()
async def admin(session: AsyncSession) -> Identity:
    return await SqlUserRepository(session).create(
        email="admin@example.com", password_hash="unused", name="Admin", role=Role.ADMIN
    )
