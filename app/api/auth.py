"""Public endpoints: register, login and token refresh."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import Tokens
from app.core.database import get_db
from app.core.errors import TokenInvalid
from app.schemas.envelope import Envelope, UserSummary
from app.schemas.users import LoginRequest, RefreshRequest, RegisterRequest
from app.services import users as user_service

router = APIRouter()


@router.post("/register", response_model=Envelope, response_model_exclude_none=True)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope:
    """Create an account; the response never echoes the password."""
    user = user_service.register_user(db, body)
    return Envelope(
        status_code=200,
        message="User saved successfully",
        user=UserSummary.model_validate(user),
    )


@router.post("/login", response_model=Envelope, response_model_exclude_none=True)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Tokens,
) -> Envelope:
    """
    Authenticate with email and password; returns access and refresh tokens.
    Include the access token in the Authorization header as: Bearer <token>
    """
    user, pair = user_service.login(db, tokens, body.email, body.password)
    return Envelope(
        status_code=200,
        message="Successfully logged in",
        token=pair.access_token,
        refresh_token=pair.refresh_token,
        expiration_time=tokens.expiration_label,
        role=user.role,
        email=user.email,
        name=user.name,
        city=user.city,
    )


@router.post("/refresh", response_model=Envelope, response_model_exclude_none=True)
def refresh_token(
    body: RefreshRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Tokens,
) -> Envelope:
    """Exchange a refresh token for a new access/refresh pair."""
    presented = body.presented_token
    if not presented:
        raise TokenInvalid("Refresh token is missing")
    user, pair = user_service.refresh(db, tokens, presented)
    return Envelope(
        status_code=200,
        message="Successfully refreshed token",
        token=pair.access_token,
        refresh_token=pair.refresh_token,
        expiration_time=tokens.expiration_label,
        role=user.role,
    )
