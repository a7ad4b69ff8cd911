from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from evalapi.domain import Evaluation, EvaluationStatus, Page

from .common import CamelModel


class EvaluationCreate(BaseModel):
    title: str = Field(..., description="Required, non-empty")
    description: str | None = None
    score: Any = Field(None, description="0 to 100", json_schema_extra={"type": "number"})
    status: str | None = Field(
        None, description=f"One of {', '.join(EvaluationStatus.values())}; defaults to pending"
    )


class EvaluationUpdate(BaseModel):
    """Only the fields sent are changed."""

    title: str | None = None
    description: str | None = None
    score: Any = Field(
        None, description="0 to 100, null clears it", json_schema_extra={"type": "number"}
    )
    status: str | None = None


class OwnerResponse(BaseModel):
    id: str
    name: str
    email: str


class EvaluationResponse(CamelModel):
    id: str
    title: str
    description: str | None = None
    score: float | None = None
    status: EvaluationStatus
    owner_id: str
    owner: OwnerResponse | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, evaluation: Evaluation) -> EvaluationResponse:
        owner = evaluation.owner
        return cls(
            id=evaluation.id,
            title=evaluation.title,
            description=evaluation.description,
            score=evaluation.score,
            status=evaluation.status,
            owner_id=evaluation.owner_id,
            owner=OwnerResponse(id=owner.id, name=owner.name, email=owner.email) if owner else None,
            created_at=evaluation.created_at,
            updated_at=evaluation.updated_at,
        )


class EvaluationEnvelope(BaseModel):
    evaluation: EvaluationResponse


class EvaluationMessageResponse(BaseModel):
    message: str
    evaluation: EvaluationResponse


class PaginationResponse(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class EvaluationListResponse(BaseModel):
    evaluations: list[EvaluationResponse]
    pagination: PaginationResponse

    @classmethod
    def from_page(cls, page: Page) -> EvaluationListResponse:
        return cls(
            evaluations=[EvaluationResponse.from_domain(item) for item in page.items],
            pagination=PaginationResponse(
                current_page=page.current_page,
                total_pages=page.total_pages,
                total_items=page.total_items,
                items_per_page=page.items_per_page,
            ),
        )
