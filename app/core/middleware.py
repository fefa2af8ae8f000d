"""
Request pipeline: authentication sets the principal, authorization enforces
the access rules. Authentication must run first (outermost of the two).
"""

import logging

from sqlalchemy.orm import Session, sessionmaker
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from app.core.authentication import Principal, authenticate
from app.core.errors import UserManagementError, error_response
from app.core.policy import ACCESS_RULES, AccessRule, check_access
from app.core.tokens import TokenService

logger = logging.getLogger(__name__)


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """Populate request.state.principal from the bearer token; never rejects."""

    def __init__(
        self,
        app: ASGIApp,
        session_factory: sessionmaker[Session],
        token_service: TokenService,
    ) -> None:
        super().__init__(app)
        self._session_factory = session_factory
        self._tokens = token_service

    def _resolve(self, authorization: str | None) -> Principal | None:
        db = self._session_factory()
        try:
            return authenticate(authorization, db, self._tokens)
        finally:
            db.close()

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        # An earlier pass over the same request already authenticated it.
        if getattr(request.state, "principal", None) is None:
            authorization = request.headers.get("Authorization")
            principal = None
            if authorization:
                principal = await run_in_threadpool(self._resolve, authorization)
            request.state.principal = principal
        return await call_next(request)


class AuthorizationMiddleware(BaseHTTPMiddleware):
    """Reject requests the access rules do not allow, before any handler runs."""

    def __init__(
        self,
        app: ASGIApp,
        rules: tuple[AccessRule, ...] = ACCESS_RULES,
    ) -> None:
        super().__init__(app)
        self._rules = rules

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        principal = getattr(request.state, "principal", None)
        try:
            check_access(request.url.path, principal, self._rules)
        except UserManagementError as e:
            logger.info(
                "Request denied",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "reason": e.code,
                    "user_id": principal.user_id if principal else None,
                },
            )
            return error_response(e)
        return await call_next(request)
