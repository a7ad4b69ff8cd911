"""Translate raised errors into JSON responses in one place."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from evalapi.core.errors import AppError, FieldViolation, InvalidInputError

logger = structlog.get_logger()


def _field_name(loc: tuple | list) -> str:
    # ("body", "score") -> "score"; ("query", "page") -> "page"
    parts = [str(part) for part in loc if part not in ("body", "query", "path", "header")]
    return ".".join(parts) or "body"


def error_body(exc: AppError) -> dict:
    body: dict = {"error": exc.message}
    if isinstance(exc, InvalidInputError):
        body["details"] = [violation.to_dict() for violation in exc.violations]
    return body


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        await logger.aerror("app_error", error=exc.message, exc_info=exc)
    else:
        await logger.ainfo("request_rejected", status_code=exc.status_code, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    violations = [
        FieldViolation(_field_name(err.get("loc", ())), err.get("msg", "Invalid value"))
        for err in exc.errors()
    ]
    return await app_error_handler(request, InvalidInputError(violations))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": jsonable_encoder(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    await logger.aerror("unhandled_error", error_type=type(exc).__name__, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
