"""Shared fixtures for tests: in-memory database, fixed clock, test app."""

from datetime import UTC, datetime, timedelta

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.tokens import TokenConfig, TokenService
from app.models import Base

TEST_SECRET = "unit-test-signing-key-0123456789abcdef0123456789"
TEST_ORIGIN = "http://localhost:3000"


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


def make_session_factory() -> sessionmaker[Session]:
    """Fresh in-memory SQLite database with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_token_service(clock: FakeClock | None = None, secret: str = TEST_SECRET) -> TokenService:
    return TokenService(TokenConfig(secret=secret, expire_minutes=1440), clock=clock)


def make_settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite://",
        JWT_SECRET=TEST_SECRET,
        JWT_EXPIRE_MINUTES=1440,
        CORS_ALLOWED_ORIGIN=TEST_ORIGIN,
    )
