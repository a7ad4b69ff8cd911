"""Storage contracts used by the domain services."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from evalapi.core.auth import Role
from evalapi.domain.models import Evaluation, Identity


class DuplicateEmailError(Exception):
    """Raised by a credential store when the email is already registered."""


class UserRepository(Protocol):
    async def find_by_id(self, user_id: str) -> Identity | None: ...

    async def find_by_email(self, email: str) -> Identity | None: ...

    async def create(
        self, *, email: str, password_hash: str, name: str, role: Role
    ) -> Identity:
        """Persist a new identity, raising ``DuplicateEmailError`` on a taken email."""
        ...


class EvaluationRepository(Protocol):
    async def find_by_id(self, evaluation_id: str) -> Evaluation | None: ...

    async def find_page(
        self, *, owner_id: str | None, skip: int, limit: int
    ) -> tuple[list[Evaluation], int]:
        """Return one page, newest first, and the total matching count.

        ``owner_id=None`` matches every record.
        """
        ...

    async def create(self, *, owner_id: str, fields: Mapping[str, Any]) -> Evaluation: ...

    async def update_fields(
        self, evaluation_id: str, fields: Mapping[str, Any]
    ) -> Evaluation | None: ...

    async def delete(self, evaluation_id: str) -> bool: ...
