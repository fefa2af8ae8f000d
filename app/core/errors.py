"""Error taxonomy and the handlers that render it as response envelopes."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.schemas.envelope import Envelope

logger = logging.getLogger(__name__)


class UserManagementError(Exception):
    """Base for errors surfaced to the caller as a status code plus message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return type(self).__name__

    @property
    def headers(self) -> dict[str, str] | None:
        return None


class NotFound(UserManagementError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class DuplicateEmail(UserManagementError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Email is already registered"


class BadCredentials(UserManagementError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class TokenInvalid(UserManagementError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token"


class TokenExpired(TokenInvalid):
    default_message = "Token has expired"


class Unauthenticated(UserManagementError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"

    @property
    def headers(self) -> dict[str, str] | None:
        return {"WWW-Authenticate": "Bearer"}


class Forbidden(UserManagementError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


def envelope_response(
    status_code: int,
    error: str,
    message: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Render an error as the uniform response envelope (absent fields omitted)."""
    body = Envelope(status_code=status_code, error=error, message=message)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
        headers=headers,
    )


def error_response(exc: UserManagementError) -> JSONResponse:
    return envelope_response(exc.status_code, exc.code, exc.message, exc.headers)


async def _handle_user_management_error(
    request: Request, exc: UserManagementError
) -> JSONResponse:
    return error_response(exc)


async def _handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Keep the first problem only; the envelope carries a single message.
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    return envelope_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY, "ValidationError", message
    )


async def _handle_http_error(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return envelope_response(
        exc.status_code,
        "HTTPError",
        str(exc.detail),
        getattr(exc, "headers", None),
    )


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error",
        extra={"path": request.url.path, "method": request.method},
    )
    return envelope_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "InternalError", "Internal server error"
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach envelope-rendering handlers for every error the API can surface."""
    app.add_exception_handler(UserManagementError, _handle_user_management_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, _handle_http_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)
