"""Shared field checks for request schemas.

Checks raise ``ValueError`` with the user-facing message; ``validate_input``
surfaces the first message as the action error.
"""

from __future__ import annotations

from typing import Any, Optional, Type, TypeVar

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from core.constants import InputLimits
from core.exceptions import ValidationError
from utils.validators import is_valid_uuid

ModelT = TypeVar("ModelT", bound=BaseModel)


class InputSchema(BaseModel):
    """Base for request schemas; defaults are validated so missing fields get our messages."""

    model_config = ConfigDict(validate_default=True, extra="ignore", frozen=True)


def require_uuid(value: Any, message: str) -> str:
    if not is_valid_uuid(value):
        raise ValueError(message)
    return value.lower()


def require_email(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Email is required")
    try:
        validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError("Invalid email address") from exc
    return value.strip().lower()


def require_password(value: Any, min_length: int) -> str:
    if not isinstance(value, str) or len(value) < min_length:
        raise ValueError(f"Password must be at least {min_length} characters")
    return value


def require_name(value: Any, label: str) -> str:
    """Trimmed, non-empty name of at most 255 characters."""
    if value is None:
        value = ""
    if not isinstance(value, str):
        raise ValueError(f"{label} is required")
    value = value.strip()
    if not value:
        raise ValueError(f"{label} is required")
    if len(value) > InputLimits.NAME_MAX_LENGTH:
        raise ValueError(f"{label} must be {InputLimits.NAME_MAX_LENGTH} characters or less")
    return value


def optional_text(value: Any, label: str, max_length: int) -> Optional[str]:
    """Trimmed optional text; blank becomes ``None``."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{label} must be text")
    value = value.strip()
    if len(value) > max_length:
        raise ValueError(f"{label} must be {max_length} characters or less")
    return value or None


def first_error_message(error: PydanticValidationError) -> str:
    issues = error.errors()
    if not issues:
        return "Invalid input"
    issue = issues[0]
    ctx_error = (issue.get("ctx") or {}).get("error")
    if ctx_error is not None:
        return str(ctx_error)
    return issue.get("msg", "Invalid input")


def validate_input(schema: Type[ModelT], **data: Any) -> ModelT:
    """Validate ``data`` against ``schema``.

    Raises:
        ValidationError: With the message of the first failing field
    """
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(first_error_message(exc)) from exc
