"""Lookups and persistence helpers for User rows."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateEmail
from app.models.user import User


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def list_all_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.id).all()


def save_user(db: Session, user: User) -> User:
    """
    Add (or flush changes to) a user and commit.

    The unique index on email is the final word on duplicates: a violation
    rolls back and surfaces as DuplicateEmail.
    """
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DuplicateEmail() from e
    db.refresh(user)
    return user


def remove_user(db: Session, user: User) -> None:
    db.delete(user)
    db.commit()
