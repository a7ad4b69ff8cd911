from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import Response
from structlog.contextvars import bind_contextvars, clear_contextvars

from evalapi.api.errors import register_exception_handlers
from evalapi.api.routes import register_routes
from evalapi.core.auth import TokenService
from evalapi.core.config import Settings, get_settings
from evalapi.core.logging import setup_logging
from evalapi.domain.services import PasswordHasher
from evalapi.infrastructure.db import Database

logger = structlog.get_logger()

DOCS_URL = "/api-docs"


def create_app(settings: Settings | None = None, *, database: Database | None = None) -> FastAPI:
    """Application factory for the public API.

    All collaborators are built once from ``settings`` and kept on
    ``app.state`` for the request dependencies in :mod:`evalapi.api.deps`.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, json_logs=settings.json_logs)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "service_startup",
            service=settings.app_name,
            environment=settings.environment,
            version=settings.version,
            docs=DOCS_URL,
        )
        yield
        await app.state.database.dispose()
        logger.info("service_shutdown", service=settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        description="CRUD API for evaluation records with JWT authentication.",
        lifespan=lifespan,
        docs_url=DOCS_URL,
        openapi_url=f"{DOCS_URL}/openapi.json",
        redoc_url=None,
    )

    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)
    app.state.token_service = TokenService(settings)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    register_routes(app)

    @app.middleware("http")
    async def correlation_id_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get("x-request-id", str(uuid4()))
        bind_contextvars(
            request_id=request_id,
            path=str(request.url.path),
            method=request.method,
        )
        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_contextvars()

    return app


app = create_app()
