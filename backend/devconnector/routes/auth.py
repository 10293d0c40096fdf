"""
DevConnector Backend — Auth Route Handlers
============================================

What:  GET /api/auth (current user) and POST /api/auth (login).
"""

from bson import ObjectId
from fastapi import APIRouter, Depends

from devconnector.dependencies import get_auth_service
from devconnector.middleware.auth import get_current_user_id
from devconnector.schemas.common import ErrorResponse, TokenResponse
from devconnector.schemas.user import LoginRequest, UserResponse
from devconnector.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.get(
    "",
    response_model=UserResponse,
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        404: {"description": "User no longer exists", "model": ErrorResponse},
    },
    summary="Get the logged-in user",
)
async def get_me(
    user_id: ObjectId = Depends(get_current_user_id),
    service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    return await service.get_current_user(user_id)


@router.post(
    "",
    response_model=TokenResponse,
    responses={
        400: {"description": "Invalid input or credentials", "model": ErrorResponse},
    },
    summary="Authenticate and get a token",
)
async def login(
    payload: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    return await service.login(payload)
