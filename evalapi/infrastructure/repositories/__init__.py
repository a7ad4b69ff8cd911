from .evaluations import SqlEvaluationRepository
from .users import SqlUserRepository

__all__ = ["SqlEvaluationRepository", "SqlUserRepository"]
