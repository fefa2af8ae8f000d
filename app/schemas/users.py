"""Request bodies for auth and admin user endpoints (camelCase keys, unknown keys ignored)."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.core.security import (
    CITY_MAX_LEN,
    EMAIL_MAX_LEN,
    EMAIL_MIN_LEN,
    NAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)
from app.models.user import Role


def normalize_email(value: str) -> str:
    """Emails are the login identity; compare them stripped and lower-cased."""
    email = value.strip().lower()
    if "@" not in email or email.startswith("@") or email.endswith("@"):
        raise ValueError("must be an email address")
    return email


def _coerce_role(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().upper()
    return value


class _RequestBody(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class RegisterRequest(_RequestBody):
    """New account fields."""

    email: str = Field(..., min_length=EMAIL_MIN_LEN, max_length=EMAIL_MAX_LEN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    name: str = Field(default="", max_length=NAME_MAX_LEN)
    city: str = Field(default="", max_length=CITY_MAX_LEN)
    role: Role = Role.USER

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("role", mode="before")
    @classmethod
    def validate_role(cls, v: Any) -> Any:
        return _coerce_role(v)


class LoginRequest(_RequestBody):
    """Credentials for login."""

    email: str = Field(..., min_length=EMAIL_MIN_LEN, max_length=EMAIL_MAX_LEN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)


class RefreshRequest(_RequestBody):
    """Refresh token, sent either as refreshToken or as token."""

    refresh_token: str | None = None
    token: str | None = None

    @property
    def presented_token(self) -> str:
        return (self.refresh_token or self.token or "").strip()


class UserUpdateRequest(_RequestBody):
    """Admin update; only the fields present are changed."""

    email: str | None = Field(default=None, min_length=EMAIL_MIN_LEN, max_length=EMAIL_MAX_LEN)
    name: str | None = Field(default=None, max_length=NAME_MAX_LEN)
    city: str | None = Field(default=None, max_length=CITY_MAX_LEN)
    password: str | None = Field(default=None, max_length=PASSWORD_MAX_LEN)
    role: Role | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return normalize_email(v) if v is not None else None

    @field_validator("role", mode="before")
    @classmethod
    def validate_role(cls, v: Any) -> Any:
        return _coerce_role(v)
