"""Issuance and verification of signed, time-bound bearer tokens (JWT, HMAC)."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from app.core.config import Settings
from app.core.errors import TokenInvalid

# Claims the service sets itself; caller-supplied claims cannot override them.
RESERVED_CLAIMS = ("sub", "iat", "exp")


@dataclass(frozen=True)
class TokenConfig:
    """Signing key and lifetime shared by access and refresh tokens."""

    secret: str
    algorithm: str = "HS256"
    expire_minutes: int = 1440

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenConfig":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class TokenService:
    """
    Signs and verifies tokens whose subject is the user's email.

    Expiry is judged against this service's clock rather than PyJWT's, so that
    a token expiring at T is valid strictly before T and expired from T on.
    There is no revocation: a token stays usable until it expires.
    """

    def __init__(
        self,
        config: TokenConfig,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not config.secret:
            raise ValueError("Token signing secret must be non-empty")
        self._config = config
        self._clock = clock or (lambda: datetime.now(UTC))

    @property
    def lifetime(self) -> timedelta:
        return timedelta(minutes=self._config.expire_minutes)

    @property
    def expiration_label(self) -> str:
        """Human label for the token lifetime, e.g. '24Hrs'."""
        minutes = self._config.expire_minutes
        if minutes % 60 == 0:
            return f"{minutes // 60}Hrs"
        return f"{minutes}Mins"

    def _issue(self, subject: str, extra_claims: dict[str, Any] | None = None) -> str:
        now = self._clock()
        payload: dict[str, Any] = {
            k: v for k, v in (extra_claims or {}).items() if k not in RESERVED_CLAIMS
        }
        payload.update(
            {
                "sub": subject,
                "iat": now,
                "exp": now + self.lifetime,
            }
        )
        return jwt.encode(payload, self._config.secret, algorithm=self._config.algorithm)

    def issue_access_token(self, subject: str) -> str:
        return self._issue(subject)

    def issue_refresh_token(self, subject: str, extra_claims: dict[str, Any]) -> str:
        """Same signing and lifetime as the access token, plus caller claims."""
        return self._issue(subject, extra_claims)

    def issue_pair(
        self, subject: str, extra_claims: dict[str, Any] | None = None
    ) -> TokenPair:
        return TokenPair(
            access_token=self.issue_access_token(subject),
            refresh_token=self.issue_refresh_token(subject, extra_claims or {}),
        )

    def decode(self, token: str) -> dict[str, Any]:
        """
        Verify signature and format; return the claims without judging expiry.
        Raises TokenInvalid on any verification failure.
        """
        if not token:
            raise TokenInvalid("Token is missing")
        try:
            return jwt.decode(
                token,
                self._config.secret,
                algorithms=[self._config.algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "require": list(RESERVED_CLAIMS),
                },
            )
        except jwt.PyJWTError as e:
            raise TokenInvalid(f"Invalid token: {e}") from e

    def extract_subject(self, token: str) -> str:
        subject = self.decode(token).get("sub")
        if not isinstance(subject, str) or not subject:
            raise TokenInvalid("Invalid token payload")
        return subject

    def is_expired(self, token: str) -> bool:
        exp = self.decode(token)["exp"]
        try:
            expires_at = float(exp)
        except (TypeError, ValueError) as e:
            raise TokenInvalid("Invalid token payload") from e
        return self._clock().timestamp() >= expires_at

    def is_valid(self, token: str, expected_subject: str) -> bool:
        """True iff the subject matches and the token has not expired; never raises."""
        try:
            return self.extract_subject(token) == expected_subject and not self.is_expired(token)
        except TokenInvalid:
            return False
