from __future__ import annotations

from datetime import UTC, datetime, timedelta
from enum import Enum

import jwt

from evalapi.core.config import Settings


class TokenError(Exception):
    """Raised when a token cannot be decoded or validated."""


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"

    @classmethod
    def contains(cls, value: str) -> bool:
        return value in {role.value for role in cls}


class TokenService:
    """Issues and verifies signed, time-limited bearer tokens.

    Tokens are stateless: a token is valid while its signature checks out and
    its ``exp`` claim lies in the future. Nothing is persisted, so there is no
    revocation; logging out means the client discards the token.
    """

    def __init__(self, settings: Settings) -> None:
        self._secret = settings.jwt_secret
        self._algorithm = settings.jwt_algorithm
        self._ttl = settings.access_token_ttl
        self._issuer = settings.app_name

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, subject: str, *, expires_delta: timedelta | None = None) -> str:
        """Generate a signed JWT whose subject is the identity id."""
        now = datetime.now(UTC)
        ttl = self._ttl if expires_delta is None else expires_delta
        payload = {
            "sub": subject,
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
            "iss": self._issuer,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> str:
        """Validate signature and expiry, returning the identity id."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.PyJWTError as exc:
            raise TokenError("Invalid or expired token") from exc

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise TokenError("Token missing subject")
        return subject
