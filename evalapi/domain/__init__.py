from .models import Evaluation, EvaluationStatus, Identity, OwnerSummary, Page

__all__ = ["Evaluation", "EvaluationStatus", "Identity", "OwnerSummary", "Page"]
