"""Sign-in and sign-up schemas."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import field_validator

from core.constants import InputLimits
from schemas.common import InputSchema, require_email, require_password


class SignInSchema(InputSchema):
    email: str = ""
    password: str = ""

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, value: Any) -> str:
        return require_email(value)

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, value: Any) -> str:
        return require_password(value, InputLimits.SIGN_IN_PASSWORD_MIN_LENGTH)


class SignUpSchema(InputSchema):
    email: str = ""
    password: str = ""
    name: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, value: Any) -> str:
        return require_email(value)

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, value: Any) -> str:
        return require_password(value, InputLimits.SIGN_UP_PASSWORD_MIN_LENGTH)

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValueError("Name must be text")
        return value.strip()
