"""
DevConnector Backend — User Route Handlers
============================================

What:  POST /api/users (registration).
"""

from fastapi import APIRouter, Depends

from devconnector.dependencies import get_user_service
from devconnector.schemas.common import ErrorResponse, TokenResponse
from devconnector.schemas.user import RegisterRequest
from devconnector.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post(
    "",
    response_model=TokenResponse,
    responses={
        400: {"description": "Invalid input or email already registered", "model": ErrorResponse},
    },
    summary="Register a user",
    description=(
        "Creates an account with a Gravatar avatar derived from the email and "
        "returns a session token, as login does."
    ),
)
async def register(
    payload: RegisterRequest,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    return await service.register(payload)
