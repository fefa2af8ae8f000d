"""Resolve a bearer token into the authenticated principal for a request."""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.core.errors import TokenInvalid
from app.core.tokens import TokenService
from app.models.user import Role
from app.services.user_store import get_user_by_email

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


@dataclass(frozen=True)
class Principal:
    """Authenticated identity attached to a request; separate from the User row."""

    user_id: int
    email: str
    role: Role


def parse_bearer(authorization: str | None) -> str | None:
    """Return the token from an 'Authorization: Bearer <token>' header value, if any."""
    if not authorization or not authorization.strip():
        return None
    scheme, _, credentials = authorization.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        return None
    token = credentials.strip()
    return token or None


def authenticate(
    authorization: str | None,
    db: Session,
    tokens: TokenService,
) -> Principal | None:
    """
    Return the principal for a valid bearer token, else None.

    Never raises for bad credentials: a missing, malformed or expired token,
    or one for an unknown user, leaves the request unauthenticated and the
    authorization policy decides whether that matters.
    """
    token = parse_bearer(authorization)
    if token is None:
        return None
    try:
        subject = tokens.extract_subject(token)
    except TokenInvalid as e:
        logger.debug("Bearer token rejected: %s", e.message)
        return None
    user = get_user_by_email(db, subject)
    if user is None:
        logger.debug("Bearer token subject has no account", extra={"subject": subject})
        return None
    if not tokens.is_valid(token, user.email):
        logger.debug("Bearer token expired or mismatched", extra={"user_id": user.id})
        return None
    return Principal(user_id=user.id, email=user.email, role=Role(user.role))
