"""Explicit validation rules for each input shape.

Every ``validate_*`` function returns the list of violated fields (empty when
the input is acceptable) and never raises; callers decide whether to raise
``InvalidInputError``. The matching ``clean_*`` helpers normalise input that
has already passed validation.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from pydantic import validate_email
from pydantic_core import PydanticCustomError

from evalapi.core.auth import Role
from evalapi.core.errors import FieldViolation
from evalapi.domain.models import EvaluationStatus

EVALUATION_FIELDS = ("title", "description", "score", "status")
TITLE_MAX_LENGTH = 255
SCORE_MIN = 0
SCORE_MAX = 100
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 128
NAME_MAX_LENGTH = 128


def validate_evaluation(fields: Mapping[str, Any], *, partial: bool = False) -> list[FieldViolation]:
    """Check evaluation fields for create (``partial=False``) or update."""
    violations: list[FieldViolation] = []

    if "title" in fields or not partial:
        title = fields.get("title")
        if not isinstance(title, str) or not title.strip():
            violations.append(FieldViolation("title", "Title is required"))
        elif len(title.strip()) > TITLE_MAX_LENGTH:
            violations.append(
                FieldViolation("title", f"Title must be at most {TITLE_MAX_LENGTH} characters")
            )

    description = fields.get("description")
    if description is not None and not isinstance(description, str):
        violations.append(FieldViolation("description", "Description must be a string"))

    if "score" in fields and fields["score"] is not None:
        score = fields["score"]
        if isinstance(score, bool) or not isinstance(score, int | float) or not math.isfinite(score):
            violations.append(FieldViolation("score", "Score must be a number"))
        elif not SCORE_MIN <= score <= SCORE_MAX:
            violations.append(
                FieldViolation("score", f"Score must be between {SCORE_MIN} and {SCORE_MAX}")
            )

    if "status" in fields:
        status = fields["status"]
        if status not in EvaluationStatus.values():
            allowed = ", ".join(EvaluationStatus.values())
            violations.append(FieldViolation("status", f"Status must be one of: {allowed}"))

    return violations


def clean_evaluation(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Keep known fields, trim strings and coerce status to its enum."""
    cleaned: dict[str, Any] = {}
    for name in EVALUATION_FIELDS:
        if name not in fields:
            continue
        value = fields[name]
        if isinstance(value, str):
            value = value.strip()
        if name == "status":
            value = EvaluationStatus(value)
        elif name == "score" and value is not None:
            value = float(value)
        cleaned[name] = value
    return cleaned


def validate_registration(
    *, email: Any, password: Any, name: Any, role: Any = None
) -> list[FieldViolation]:
    violations = _validate_credentials(email=email, password=password)

    if isinstance(password, str) and password:
        if len(password) < PASSWORD_MIN_LENGTH:
            violations.append(
                FieldViolation(
                    "password", f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
                )
            )
        elif len(password) > PASSWORD_MAX_LENGTH:
            violations.append(
                FieldViolation(
                    "password", f"Password must be at most {PASSWORD_MAX_LENGTH} characters"
                )
            )

    if not isinstance(name, str) or not name.strip():
        violations.append(FieldViolation("name", "Name is required"))
    elif len(name.strip()) > NAME_MAX_LENGTH:
        violations.append(
            FieldViolation("name", f"Name must be at most {NAME_MAX_LENGTH} characters")
        )

    if role is not None and not (isinstance(role, str) and Role.contains(role)):
        allowed = ", ".join(r.value for r in Role)
        violations.append(FieldViolation("role", f"Role must be one of: {allowed}"))

    return violations


def validate_login(*, email: Any, password: Any) -> list[FieldViolation]:
    return _validate_credentials(email=email, password=password)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _validate_credentials(*, email: Any, password: Any) -> list[FieldViolation]:
    violations: list[FieldViolation] = []

    if not isinstance(email, str) or not email.strip():
        violations.append(FieldViolation("email", "Email is required"))
    else:
        try:
            validate_email(email.strip())
        except PydanticCustomError:
            violations.append(FieldViolation("email", "Please provide a valid email"))

    if not isinstance(password, str) or not password:
        violations.append(FieldViolation("password", "Password is required"))

    return violations
