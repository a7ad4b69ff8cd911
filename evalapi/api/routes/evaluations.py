from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from evalapi.api.deps import get_app_settings, get_evaluation_service, require_roles
from evalapi.api.schemas.common import MessageResponse, error_responses
from evalapi.api.schemas.evaluations import (
    EvaluationCreate,
    EvaluationEnvelope,
    EvaluationListResponse,
    EvaluationMessageResponse,
    EvaluationResponse,
    EvaluationUpdate,
)
from evalapi.core.auth import Role
from evalapi.core.config import Settings
from evalapi.domain import Identity
from evalapi.domain.pagination import PageRequest
from evalapi.domain.services import EvaluationService

router = APIRouter(prefix="/api/evaluations", tags=["Evaluations"])

# Every registered role may manage its own evaluations
evaluation_user = require_roles(Role.USER, Role.ADMIN)


@router.post(
    "",
    response_model=EvaluationMessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new evaluation",
    responses=error_responses(400, 401),
)
async def create_evaluation(
    payload: EvaluationCreate,
    user: Identity = Depends(evaluation_user),  # noqa: B008
    service: EvaluationService = Depends(get_evaluation_service),  # noqa: B008
) -> EvaluationMessageResponse:
    evaluation = await service.create(user, payload.model_dump(exclude_unset=True))
    return EvaluationMessageResponse(
        message="Evaluation created",
        evaluation=EvaluationResponse.from_domain(evaluation),
    )


@router.get(
    "",
    response_model=EvaluationListResponse,
    summary="Get all evaluations (paginated)",
    description="Admins see every evaluation, other users only their own. Newest first.",
    responses=error_responses(401),
)
async def list_evaluations(
    page: str | None = Query(None, description="Page number, defaults to 1"),
    limit: str | None = Query(None, description="Items per page, defaults to 10"),
    user: Identity = Depends(evaluation_user),  # noqa: B008
    service: EvaluationService = Depends(get_evaluation_service),  # noqa: B008
    settings: Settings = Depends(get_app_settings),  # noqa: B008
) -> EvaluationListResponse:
    window = PageRequest.from_query(
        page,
        limit,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )
    result = await service.list(user, window)
    return EvaluationListResponse.from_page(result)


@router.get(
    "/{evaluation_id}",
    response_model=EvaluationEnvelope,
    summary="Get evaluation by ID",
    responses=error_responses(401, 403, 404),
)
async def get_evaluation(
    evaluation_id: str,
    user: Identity = Depends(evaluation_user),  # noqa: B008
    service: EvaluationService = Depends(get_evaluation_service),  # noqa: B008
) -> EvaluationEnvelope:
    evaluation = await service.get(user, evaluation_id)
    return EvaluationEnvelope(evaluation=EvaluationResponse.from_domain(evaluation))


@router.put(
    "/{evaluation_id}",
    response_model=EvaluationMessageResponse,
    summary="Update evaluation",
    responses=error_responses(400, 401, 403, 404),
)
async def update_evaluation(
    evaluation_id: str,
    payload: EvaluationUpdate,
    user: Identity = Depends(evaluation_user),  # noqa: B008
    service: EvaluationService = Depends(get_evaluation_service),  # noqa: B008
) -> EvaluationMessageResponse:
    evaluation = await service.update(user, evaluation_id, payload.model_dump(exclude_unset=True))
    return EvaluationMessageResponse(
        message="Evaluation updated",
        evaluation=EvaluationResponse.from_domain(evaluation),
    )


@router.delete(
    "/{evaluation_id}",
    response_model=MessageResponse,
    summary="Delete evaluation",
    responses=error_responses(401, 403, 404),
)
async def delete_evaluation(
    evaluation_id: str,
    user: Identity = Depends(evaluation_user),  # noqa: B008
    service: EvaluationService = Depends(get_evaluation_service),  # noqa: B008
) -> MessageResponse:
    await service.delete(user, evaluation_id)
    return MessageResponse(message="Evaluation deleted")
