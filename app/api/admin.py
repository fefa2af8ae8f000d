"""Admin-only user CRUD. Access is enforced by the /admin rule before these run."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.envelope import Envelope, UserSummary
from app.schemas.users import UserUpdateRequest
from app.services import users as user_service

router = APIRouter()


@router.get("/get-all-users", response_model=Envelope, response_model_exclude_none=True)
def get_all_users(db: Annotated[Session, Depends(get_db)]) -> Envelope:
    users = user_service.list_users(db)
    return Envelope(
        status_code=200,
        message="Successful" if users else "No users found",
        users=[UserSummary.model_validate(u) for u in users],
    )


@router.get("/get-user/{user_id}", response_model=Envelope, response_model_exclude_none=True)
def get_user(user_id: int, db: Annotated[Session, Depends(get_db)]) -> Envelope:
    user = user_service.get_user(db, user_id)
    return Envelope(
        status_code=200,
        message=f"User with id {user_id} found successfully",
        user=UserSummary.model_validate(user),
    )


@router.put("/update/{user_id}", response_model=Envelope, response_model_exclude_none=True)
def update_user(
    user_id: int,
    body: UserUpdateRequest,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope:
    user = user_service.update_user(db, user_id, body)
    return Envelope(
        status_code=200,
        message="User updated successfully",
        user=UserSummary.model_validate(user),
    )


@router.delete("/delete/{user_id}", response_model=Envelope, response_model_exclude_none=True)
def delete_user(user_id: int, db: Annotated[Session, Depends(get_db)]) -> Envelope:
    user_service.delete_user(db, user_id)
    return Envelope(status_code=200, message="User deleted successfully")
