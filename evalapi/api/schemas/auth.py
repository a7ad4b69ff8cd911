"""Pydantic schemas for authentication endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from evalapi.domain import Identity

from .common import CamelModel

# --- Request Schemas ---


class RegisterRequest(BaseModel):
    """Request schema for user registration."""

    email: str = Field(..., description="User email address")
    password: str = Field(..., description="Password (min 6 characters)")
    name: str = Field(..., description="Display name")
    role: str | None = Field(None, description="`user` (default) or `admin`")


class LoginRequest(BaseModel):
    """Request schema for user login."""

    email: str = Field(..., description="User email address")
    password: str = Field(..., description="User password")


# --- Response Schemas ---


class UserResponse(BaseModel):
    """Public user fields; the password hash is never included."""

    id: str
    email: str
    name: str
    role: str

    @classmethod
    def from_identity(cls, identity: Identity) -> UserResponse:
        return cls(**identity.public())


class ProfileUser(CamelModel):
    id: str
    email: str
    name: str
    role: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_identity(cls, identity: Identity) -> ProfileUser:
        return cls(
            **identity.public(),
            created_at=identity.created_at,
            updated_at=identity.updated_at,
        )


class AuthResponse(BaseModel):
    """Response schema for registration and login."""

    message: str
    token: str = Field(..., description="JWT bearer token")
    user: UserResponse


class ProfileResponse(BaseModel):
    user: ProfileUser
