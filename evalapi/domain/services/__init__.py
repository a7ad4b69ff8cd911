from .auth_service import AuthResult, AuthService, PasswordHasher
from .evaluations import EvaluationService

__all__ = ["AuthResult", "AuthService", "EvaluationService", "PasswordHasher"]
