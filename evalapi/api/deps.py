from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from evalapi.core.auth import Role, TokenError, TokenService
from evalapi.core.config import Settings
from evalapi.core.errors import UnauthenticatedError
from evalapi.domain import Identity
from evalapi.domain.policy import ensure_role_allowed
from evalapi.domain.services import AuthService, EvaluationService, PasswordHasher
from evalapi.infrastructure.db import Database
from evalapi.infrastructure.repositories import SqlEvaluationRepository, SqlUserRepository

bearer_scheme = HTTPBearer(auto_error=False, description="JWT issued by /api/auth/login")
logger = structlog.get_logger()


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


async def get_db_session(request: Request) -> AsyncIterator[AsyncSession]:
    """Provide an async SQLAlchemy session for API handlers."""
    database: Database = request.app.state.database
    async for session in database.session():
        yield session


def get_auth_service(
    session: AsyncSession = Depends(get_db_session),  # noqa: B008
    tokens: TokenService = Depends(get_token_service),  # noqa: B008
    hasher: PasswordHasher = Depends(get_password_hasher),  # noqa: B008
) -> AuthService:
    return AuthService(SqlUserRepository(session), tokens, hasher)


def get_evaluation_service(
    session: AsyncSession = Depends(get_db_session),  # noqa: B008
) -> EvaluationService:
    return EvaluationService(SqlEvaluationRepository(session))


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),  # noqa: B008
    session: AsyncSession = Depends(get_db_session),  # noqa: B008
    tokens: TokenService = Depends(get_token_service),  # noqa: B008
) -> Identity:
    """Resolve the authenticated identity from a bearer token.

    The token is verified and its subject looked up on every request, so a
    deleted account stops working immediately even with an unexpired token.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("Access token required")

    try:
        user_id = tokens.verify(credentials.credentials)
    except TokenError as exc:
        raise UnauthenticatedError("Invalid or expired token") from exc

    identity = await SqlUserRepository(session).find_by_id(user_id)
    if identity is None:
        await logger.ainfo("token_subject_missing", user_id=user_id)
        raise UnauthenticatedError("User no longer exists")

    structlog.contextvars.bind_contextvars(user_id=identity.id)
    return identity


def require_roles(*roles: Role) -> Callable[..., Awaitable[Identity]]:
    """Dependency factory enforcing that the authenticated user has one of ``roles``."""
    if not roles:
        raise ValueError("At least one role is required")

    async def dependency(user: Identity = Depends(get_current_user)) -> Identity:  # noqa: B008
        ensure_role_allowed(user, roles)
        return user

    return dependency
