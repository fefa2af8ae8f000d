"""Shared route dependencies: token service and the authenticated principal."""

from typing import Annotated

from fastapi import Depends, Request

from app.core.authentication import Principal
from app.core.errors import Unauthenticated
from app.core.tokens import TokenService


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_current_principal(request: Request) -> Principal:
    """Principal set by the authentication middleware. Raises 401 if absent."""
    principal = getattr(request.state, "principal", None)
    if principal is None:
        raise Unauthenticated()
    return principal


Tokens = Annotated[TokenService, Depends(get_token_service)]
CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
