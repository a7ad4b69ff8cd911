from __future__ import annotations

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from evalapi.core.auth import Role
from evalapi.domain.models import Identity
from evalapi.domain.repositories import DuplicateEmailError
from evalapi.infrastructure.db.models import UserModel

logger = structlog.get_logger()


def to_identity(user: UserModel) -> Identity:
    return Identity(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        password_hash=user.hashed_password,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class SqlUserRepository:
    """Credential store backed by the ``users`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, user_id: str) -> Identity | None:
        user = await self.session.get(UserModel, user_id)
        return to_identity(user) if user else None

    async def find_by_email(self, email: str) -> Identity | None:
        stmt = select(UserModel).where(UserModel.email == email)
        user = (await self.session.execute(stmt)).scalar_one_or_none()
        return to_identity(user) if user else None

    async def create(
        self, *, email: str, password_hash: str, name: str, role: Role
    ) -> Identity:
        user = UserModel(email=email, hashed_password=password_hash, name=name, role=role)
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError as exc:
            # The unique index on email decides concurrent registrations
            await self.session.rollback()
            raise DuplicateEmailError(email) from exc

        await self.session.refresh(user)
        logger.debug("user_persisted", user_id=user.id)
        return to_identity(user)
