"""Authorization rules: role allowlists and ownership-or-admin."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from evalapi.core.auth import Role
from evalapi.core.errors import ForbiddenError
from evalapi.domain.models import Identity

logger = structlog.get_logger()


def role_allowed(identity: Identity, allowed: Iterable[Role]) -> bool:
    return identity.role in set(allowed)


def can_access(identity: Identity, owner_id: str) -> bool:
    """Admins may act on any record, everyone else only on their own."""
    return identity.is_admin or identity.id == owner_id


def ensure_role_allowed(identity: Identity, allowed: Iterable[Role]) -> None:
    allowed = tuple(allowed)
    if not role_allowed(identity, allowed):
        logger.info(
            "role_denied",
            user_id=identity.id,
            role=identity.role.value,
            allowed=[role.value for role in allowed],
        )
        raise ForbiddenError("Insufficient permissions")


def ensure_owner_or_admin(identity: Identity, owner_id: str) -> None:
    if not can_access(identity, owner_id):
        raise ForbiddenError("Access denied")
