from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from evalapi.core.errors import ForbiddenError, InvalidInputError, NotFoundError
from evalapi.domain.models import Evaluation, Identity, Page
from evalapi.domain.pagination import PageRequest, total_pages
from evalapi.domain.policy import ensure_owner_or_admin
from evalapi.domain.repositories import EvaluationRepository
from evalapi.domain.validation import clean_evaluation, validate_evaluation

logger = structlog.get_logger()


class EvaluationService:
    """CRUD over evaluation records with ownership enforcement."""

    def __init__(self, evaluations: EvaluationRepository) -> None:
        self.evaluations = evaluations

    async def create(self, identity: Identity, payload: Mapping[str, Any]) -> Evaluation:
        violations = validate_evaluation(payload)
        if violations:
            raise InvalidInputError(violations)

        evaluation = await self.evaluations.create(
            owner_id=identity.id, fields=clean_evaluation(payload)
        )
        await logger.ainfo("evaluation_created", evaluation_id=evaluation.id, owner_id=identity.id)
        return evaluation

    async def list(self, identity: Identity, window: PageRequest) -> Page:
        """List records visible to ``identity``, newest first."""
        owner_filter = None if identity.is_admin else identity.id
        items, total = await self.evaluations.find_page(
            owner_id=owner_filter, skip=window.skip, limit=window.limit
        )
        return Page(
            items=items,
            current_page=window.page,
            total_pages=total_pages(total, window.limit),
            total_items=total,
            items_per_page=window.limit,
        )

    async def get(self, identity: Identity, evaluation_id: str) -> Evaluation:
        return await self._load_accessible(identity, evaluation_id)

    async def update(
        self, identity: Identity, evaluation_id: str, patch: Mapping[str, Any]
    ) -> Evaluation:
        await self._load_accessible(identity, evaluation_id)

        violations = validate_evaluation(patch, partial=True)
        if violations:
            raise InvalidInputError(violations)

        fields = clean_evaluation(patch)
        updated = await self.evaluations.update_fields(evaluation_id, fields)
        if updated is None:
            # Deleted between the access check and the write
            raise NotFoundError("Evaluation not found")

        await logger.ainfo(
            "evaluation_updated",
            evaluation_id=evaluation_id,
            user_id=identity.id,
            updated_fields=sorted(fields),
        )
        return updated

    async def delete(self, identity: Identity, evaluation_id: str) -> None:
        await self._load_accessible(identity, evaluation_id)
        if not await self.evaluations.delete(evaluation_id):
            raise NotFoundError("Evaluation not found")
        await logger.ainfo("evaluation_deleted", evaluation_id=evaluation_id, user_id=identity.id)

    async def _load_accessible(self, identity: Identity, evaluation_id: str) -> Evaluation:
        evaluation = await self.evaluations.find_by_id(evaluation_id)
        if evaluation is None:
            raise NotFoundError("Evaluation not found")

        try:
            ensure_owner_or_admin(identity, evaluation.owner_id)
        except ForbiddenError:
            await logger.ainfo(
                "evaluation_access_denied",
                evaluation_id=evaluation_id,
                user_id=identity.id,
            )
            raise
        return evaluation
