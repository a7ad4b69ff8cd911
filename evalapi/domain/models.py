from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime

from evalapi.core.auth import Role


class EvaluationStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(status.value for status in cls)


@dataclass(slots=True)
class Identity:
    """Represents an authenticated actor within the system."""

    id: str
    email: str
    name: str
    role: Role
    password_hash: str = field(default="", repr=False)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def public(self) -> dict:
        """Fields safe to return to clients."""
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
        }


@dataclass(slots=True)
class OwnerSummary:
    id: str
    name: str
    email: str


@dataclass(slots=True)
class Evaluation:
    """An evaluation record owned by exactly one identity."""

    id: str
    title: str
    owner_id: str
    status: EvaluationStatus = EvaluationStatus.PENDING
    description: str | None = None
    score: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    owner: OwnerSummary | None = None


@dataclass(slots=True)
class Page:
    """One window of a filtered, ordered result set."""

    items: list[Evaluation]
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
