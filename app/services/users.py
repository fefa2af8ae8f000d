"""User operations behind the auth, admin and profile routes."""

import logging

from sqlalchemy.orm import Session

from app.core.authentication import Principal
from app.core.errors import BadCredentials, DuplicateEmail, NotFound, TokenExpired, TokenInvalid
from app.core.security import hash_password, verify_password
from app.core.tokens import TokenPair, TokenService
from app.models.user import User
from app.schemas.users import RegisterRequest, UserUpdateRequest
from app.services.user_store import (
    get_user_by_email,
    get_user_by_id,
    list_all_users,
    remove_user,
    save_user,
)

logger = logging.getLogger(__name__)


def register_user(db: Session, data: RegisterRequest) -> User:
    """Create an account. Raises DuplicateEmail if the email is taken."""
    if get_user_by_email(db, data.email) is not None:
        raise DuplicateEmail()
    user = User(
        email=data.email,
        name=data.name.strip(),
        city=data.city.strip(),
        role=data.role,
        password_hash=hash_password(data.password),
    )
    user = save_user(db, user)
    logger.info("User registered", extra={"user_id": user.id, "role": user.role.value})
    return user


def login(
    db: Session,
    tokens: TokenService,
    email: str,
    password: str,
) -> tuple[User, TokenPair]:
    """
    Check credentials and issue an access/refresh pair for the user.
    Raises NotFound for an unknown email and BadCredentials for a wrong password.
    """
    user = get_user_by_email(db, email)
    if user is None:
        logger.warning("Login for unknown email", extra={"email": email})
        raise NotFound()
    if not verify_password(password, user.password_hash):
        logger.warning("Login with wrong password", extra={"user_id": user.id})
        raise BadCredentials()
    pair = tokens.issue_pair(user.email, {})
    logger.info("User logged in", extra={"user_id": user.id})
    return user, pair


def refresh(db: Session, tokens: TokenService, refresh_token: str) -> tuple[User, TokenPair]:
    """
    Exchange a refresh token for a fresh pair for the same subject.
    Raises TokenInvalid (bad signature, unknown subject) or TokenExpired.
    """
    subject = tokens.extract_subject(refresh_token)
    if tokens.is_expired(refresh_token):
        logger.info("Refresh with expired token", extra={"subject": subject})
        raise TokenExpired()
    user = get_user_by_email(db, subject)
    if user is None:
        logger.info("Refresh for missing account", extra={"subject": subject})
        raise TokenInvalid("Token subject no longer exists")
    return user, tokens.issue_pair(user.email, {})


def list_users(db: Session) -> list[User]:
    return list_all_users(db)


def get_user(db: Session, user_id: int) -> User:
    user = get_user_by_id(db, user_id)
    if user is None:
        raise NotFound(f"User {user_id} not found")
    return user


def update_user(db: Session, user_id: int, changes: UserUpdateRequest) -> User:
    """
    Apply the supplied fields to a user. The password is re-hashed only when a
    non-empty new one is given; taking another account's email raises DuplicateEmail.
    """
    user = get_user(db, user_id)
    if changes.email is not None and changes.email != user.email:
        if get_user_by_email(db, changes.email) is not None:
            raise DuplicateEmail()
        user.email = changes.email
    if changes.name is not None:
        user.name = changes.name.strip()
    if changes.city is not None:
        user.city = changes.city.strip()
    if changes.role is not None:
        user.role = changes.role
    if changes.password:
        user.password_hash = hash_password(changes.password)
    user = save_user(db, user)
    logger.info("User updated", extra={"user_id": user.id})
    return user


def delete_user(db: Session, user_id: int) -> None:
    user = get_user(db, user_id)
    remove_user(db, user)
    logger.info("User deleted", extra={"user_id": user_id})


def get_profile(db: Session, principal: Principal) -> User:
    """The caller's own account, looked up by authenticated email only."""
    user = get_user_by_email(db, principal.email)
    if user is None:
        raise NotFound()
    return user
