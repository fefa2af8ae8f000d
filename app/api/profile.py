"""Endpoints for any signed-in user (ADMIN or USER)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import CurrentPrincipal
from app.core.database import get_db
from app.schemas.envelope import Envelope, UserSummary
from app.services import users as user_service

router = APIRouter()


@router.get("/get-profile", response_model=Envelope, response_model_exclude_none=True)
def get_profile(
    principal: CurrentPrincipal,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope:
    """Return the caller's own account; the identity comes from the token only."""
    user = user_service.get_profile(db, principal)
    return Envelope(
        status_code=200,
        message="Successful",
        email=user.email,
        name=user.name,
        city=user.city,
        role=user.role,
        user=UserSummary.model_validate(user),
    )
