"""Registration, login and password hashing."""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from passlib.context import CryptContext

from evalapi.core.auth import Role, TokenService
from evalapi.core.errors import ConflictError, InvalidInputError, UnauthenticatedError
from evalapi.domain.models import Identity
from evalapi.domain.repositories import DuplicateEmailError, UserRepository
from evalapi.domain.validation import normalize_email, validate_login, validate_registration

logger = structlog.get_logger()

INVALID_CREDENTIALS = "Invalid email or password"


class PasswordHasher:
    """bcrypt hashing with a configurable cost factor."""

    def __init__(self, rounds: int = 12) -> None:
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)
        self._dummy_hash: str | None = None

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        return self._context.verify(plain_password, hashed_password)

    def burn(self, plain_password: str) -> None:
        """Spend one verification so unknown emails cost as much as bad passwords."""
        if self._dummy_hash is None:
            self._dummy_hash = self._context.hash("not-a-real-password")
        self._context.verify(plain_password, self._dummy_hash)


@dataclass(slots=True)
class AuthResult:
    token: str
    identity: Identity


class AuthService:
    """Service for authentication operations."""

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenService,
        hasher: PasswordHasher,
    ) -> None:
        self.users = users
        self.tokens = tokens
        self.hasher = hasher

    async def register_user(
        self,
        *,
        email: str,
        password: str,
        name: str,
        role: str | None = None,
    ) -> AuthResult:
        violations = validate_registration(email=email, password=password, name=name, role=role)
        if violations:
            raise InvalidInputError(violations)

        email = normalize_email(email)
        user_role = Role(role) if role else Role.USER
        await logger.ainfo("register_attempt", email=email, role=user_role.value)

        try:
            identity = await self.users.create(
                email=email,
                password_hash=self.hasher.hash(password),
                name=name.strip(),
                role=user_role,
            )
        except DuplicateEmailError as exc:
            await logger.awarning("register_duplicate_email", email=email)
            raise ConflictError("Email already registered") from exc

        await logger.ainfo("register_success", user_id=identity.id, email=email)
        return AuthResult(token=self.tokens.issue(identity.id), identity=identity)

    async def login(self, *, email: str, password: str) -> AuthResult:
        """Authenticate with email and password.

        Unknown email and wrong password raise the same error so callers
        cannot tell which one failed.
        """
        violations = validate_login(email=email, password=password)
        if violations:
            raise InvalidInputError(violations)

        email = normalize_email(email)
        await logger.ainfo("login_attempt", email=email)

        identity = await self.users.find_by_email(email)
        if identity is None:
            self.hasher.burn(password)
            await logger.awarning("login_user_not_found", email=email)
            raise UnauthenticatedError(INVALID_CREDENTIALS)

        if not self.hasher.verify(password, identity.password_hash):
            await logger.awarning("login_invalid_password", email=email)
            raise UnauthenticatedError(INVALID_CREDENTIALS)

        await logger.ainfo("login_success", user_id=identity.id)
        return AuthResult(token=self.tokens.issue(identity.id), identity=identity)
