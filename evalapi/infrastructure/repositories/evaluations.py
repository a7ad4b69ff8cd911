from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from evalapi.core.errors import NotFoundError
from evalapi.domain.models import Evaluation, OwnerSummary
from evalapi.infrastructure.db.models import EvaluationModel

if TYPE_CHECKING:
    from sqlalchemy import Select


def to_evaluation(model: EvaluationModel) -> Evaluation:
    owner = model.owner
    return Evaluation(
        id=model.id,
        title=model.title,
        description=model.description,
        score=model.score,
        status=model.status,
        owner_id=model.owner_id,
        created_at=model.created_at,
        updated_at=model.updated_at,
        owner=OwnerSummary(id=owner.id, name=owner.name, email=owner.email) if owner else None,
    )


class SqlEvaluationRepository:
    """Record store backed by the ``evaluations`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, evaluation_id: str) -> Evaluation | None:
        model = await self._load(evaluation_id)
        return to_evaluation(model) if model else None

    async def find_page(
        self, *, owner_id: str | None, skip: int, limit: int
    ) -> tuple[list[Evaluation], int]:
        page_stmt: Select[tuple[EvaluationModel]] = select(EvaluationModel)
        count_stmt = select(func.count()).select_from(EvaluationModel)
        if owner_id is not None:
            page_stmt = page_stmt.where(EvaluationModel.owner_id == owner_id)
            count_stmt = count_stmt.where(EvaluationModel.owner_id == owner_id)

        total = await self.session.scalar(count_stmt) or 0
        # Windows past the end are empty; an unbounded page must not reach OFFSET
        if skip >= total:
            return [], total

        page_stmt = (
            page_stmt.order_by(EvaluationModel.created_at.desc(), EvaluationModel.id.desc())
            .offset(skip)
            .limit(limit)
        )
        models = (await self.session.execute(page_stmt)).scalars().all()
        return [to_evaluation(model) for model in models], total

    async def create(self, *, owner_id: str, fields: Mapping[str, Any]) -> Evaluation:
        model = EvaluationModel(owner_id=owner_id, **fields)
        self.session.add(model)
        await self.session.commit()

        created = await self._load(model.id)
        if created is None:
            raise NotFoundError("Evaluation not found")
        return to_evaluation(created)

    async def update_fields(
        self, evaluation_id: str, fields: Mapping[str, Any]
    ) -> Evaluation | None:
        model = await self._load(evaluation_id)
        if model is None:
            return None

        for name, value in fields.items():
            setattr(model, name, value)
        await self.session.commit()

        updated = await self._load(evaluation_id)
        return to_evaluation(updated) if updated else None

    async def delete(self, evaluation_id: str) -> bool:
        model = await self._load(evaluation_id)
        if model is None:
            return False

        await self.session.delete(model)
        await self.session.commit()
        return True

    async def _load(self, evaluation_id: str) -> EvaluationModel | None:
        stmt = (
            select(EvaluationModel)
            .where(EvaluationModel.id == evaluation_id)
            .execution_options(populate_existing=True)
        )
        return (await self.session.execute(stmt)).scalar_one_or_none()
