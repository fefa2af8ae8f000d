"""Pydantic request/response schemas."""

from app.schemas.envelope import Envelope, UserSummary
from app.schemas.health import HealthResponse
from app.schemas.users import (
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    UserUpdateRequest,
)

__all__ = [
    "Envelope",
    "HealthResponse",
    "LoginRequest",
    "RefreshRequest",
    "RegisterRequest",
    "UserSummary",
    "UserUpdateRequest",
]
