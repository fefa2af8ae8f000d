"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session, sessionmaker

from app.api import router as api_router
from app.core.config import Settings, get_settings
from app.core.database import SessionLocal
from app.core.errors import register_exception_handlers
from app.core.middleware import AuthenticationMiddleware, AuthorizationMiddleware
from app.core.tokens import TokenConfig, TokenService

logging.basicConfig(
    level=get_settings().LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)

CORS_ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE"]


def create_app(
    settings: Settings | None = None,
    session_factory: sessionmaker[Session] | None = None,
    token_service: TokenService | None = None,
) -> FastAPI:
    """Build the app; tests pass their own settings, session factory or token service."""
    settings = settings or get_settings()
    session_factory = session_factory or SessionLocal
    token_service = token_service or TokenService(TokenConfig.from_settings(settings))

    app = FastAPI(
        title="User Management API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.token_service = token_service

    register_exception_handlers(app)

    # Last added runs first: CORS, then authentication, then authorization.
    app.add_middleware(AuthorizationMiddleware)
    app.add_middleware(
        AuthenticationMiddleware,
        session_factory=session_factory,
        token_service=token_service,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CORS_ALLOWED_ORIGIN],
        allow_credentials=True,
        allow_methods=CORS_ALLOWED_METHODS,
        allow_headers=["Authorization", "Content-Type"],
    )

    app.include_router(api_router)
    return app


app = create_app()
