"""
DevConnector Backend — Authentication Guard
=============================================

What:  Resolves the caller's identity from the session token.
How:   A FastAPI dependency, declared on protected routes only. It reads the
       token from the `x-auth-token` header (the web client's header) or
       from `Authorization: Bearer <token>`, verifies it with the app's
       `TokenService`, and returns the caller's ObjectId.
Who:   Every route under /api that needs a logged-in user.

Failures:
    no token             → 401 "No token, authorization denied"
    bad/expired token    → 401 "Token is not valid"

The resolved id is also stored on `request.state.user_id` so the access
log can attribute requests to users.
"""

from typing import Optional

from bson import ObjectId
from fastapi import Depends, Header, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from devconnector.exceptions import UnauthorizedError
from devconnector.security import TokenService

_bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


async def get_current_user_id(
    request: Request,
    x_auth_token: Optional[str] = Header(default=None, alias="x-auth-token"),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> ObjectId:
    """Returns the authenticated user's id or raises UnauthorizedError."""
    token = x_auth_token or (credentials.credentials if credentials else None)
    if not token:
        raise UnauthorizedError("No token, authorization denied")

    user_id = tokens.verify(token)
    request.state.user_id = str(user_id)
    return user_id
