from __future__ import annotations

import structlog
from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter(tags=["Observability"])
logger = structlog.get_logger()


class HealthResponse(BaseModel):
    status: str


@router.get("/health", response_model=HealthResponse, summary="Service health probe")
async def health_check() -> HealthResponse:
    """Liveness probe; does not touch the database."""
    logger.debug("health_probe")
    return HealthResponse(status="ok")
