"""Authentication routes - register, login, profile."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from evalapi.api.deps import get_auth_service, get_current_user
from evalapi.api.schemas.auth import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    ProfileUser,
    RegisterRequest,
    UserResponse,
)
from evalapi.api.schemas.common import error_responses
from evalapi.domain import Identity
from evalapi.domain.services import AuthService

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses=error_responses(400, 409),
)
async def register(
    payload: RegisterRequest,
    service: AuthService = Depends(get_auth_service),  # noqa: B008
) -> AuthResponse:
    result = await service.register_user(
        email=payload.email,
        password=payload.password,
        name=payload.name,
        role=payload.role,
    )
    return AuthResponse(
        message="User registered successfully",
        token=result.token,
        user=UserResponse.from_identity(result.identity),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login and receive a JWT",
    responses=error_responses(400, 401),
)
async def login(
    payload: LoginRequest,
    service: AuthService = Depends(get_auth_service),  # noqa: B008
) -> AuthResponse:
    result = await service.login(email=payload.email, password=payload.password)
    return AuthResponse(
        message="Login successful",
        token=result.token,
        user=UserResponse.from_identity(result.identity),
    )


@router.get(
    "/profile",
    response_model=ProfileResponse,
    summary="Get the current user's profile",
    responses=error_responses(401),
)
async def get_profile(user: Identity = Depends(get_current_user)) -> ProfileResponse:  # noqa: B008
    return ProfileResponse(user=ProfileUser.from_identity(user))
