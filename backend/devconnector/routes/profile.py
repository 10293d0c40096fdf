"""
DevConnector Backend — Profile Route Handlers
===============================================

What:  The /api/profile endpoints.

Route Inventory:
    GET    /api/profile/me                      (protected)
    POST   /api/profile                         (protected, upsert)
    GET    /api/profile                         (public)
    GET    /api/profile/user/{user_id}          (public)
    DELETE /api/profile                         (protected, deletes account)
    PUT    /api/profile/experience              (protected)
    DELETE /api/profile/experience/{exp_id}     (protected)
    PUT    /api/profile/education               (protected)
    DELETE /api/profile/education/{edu_id}      (protected)
    GET    /api/profile/github/{username}       (public, GitHub proxy)
"""

from typing import Any, List

from bson import ObjectId
from fastapi import APIRouter, Depends

from devconnector.dependencies import get_github_service, get_profile_service
from devconnector.middleware.auth import get_current_user_id
from devconnector.schemas.common import ErrorResponse, MessageResponse
from devconnector.schemas.profile import (
    EducationRequest,
    ExperienceRequest,
    ProfileRequest,
    ProfileResponse,
)
from devconnector.services.github_service import GitHubService
from devconnector.services.profile_service import ProfileService

router = APIRouter(prefix="/api/profile", tags=["Profile"])

_no_profile = {400: {"description": "No profile for this user", "model": ErrorResponse}}
_needs_profile = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    500: {"description": "Caller has no profile yet", "model": ErrorResponse},
}


@router.get("/me", response_model=ProfileResponse, responses=_no_profile)
async def get_my_profile(
    user_id: ObjectId = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    return await service.get_my_profile(user_id)


@router.post(
    "",
    response_model=ProfileResponse,
    responses={400: {"description": "Invalid input", "model": ErrorResponse}},
    summary="Create or update the caller's profile",
)
async def upsert_profile(
    payload: ProfileRequest,
    user_id: ObjectId = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    return await service.upsert_profile(user_id, payload)


@router.get("", response_model=List[ProfileResponse], summary="List all profiles")
async def list_profiles(
    service: ProfileService = Depends(get_profile_service),
) -> List[ProfileResponse]:
    return await service.list_profiles()


@router.get("/user/{user_id}", response_model=ProfileResponse, responses=_no_profile)
async def get_profile_by_user(
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    return await service.get_profile_by_user_id(user_id)


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete the caller's profile and account",
    description="The caller's posts are not deleted.",
)
async def delete_account(
    user_id: ObjectId = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    return await service.delete_account(user_id)


@router.put("/experience", response_model=ProfileResponse, responses=_needs_profile)
async def add_experience(
    payload: ExperienceRequest,
    user_id: ObjectId = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    return await service.add_experience(user_id, payload)


@router.delete("/experience/{exp_id}", response_model=ProfileResponse, responses=_needs_profile)
async def remove_experience(
    exp_id: str,
    user_id: ObjectId = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    return await service.remove_experience(user_id, exp_id)


@router.put("/education", response_model=ProfileResponse, responses=_needs_profile)
async def add_education(
    payload: EducationRequest,
    user_id: ObjectId = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    return await service.add_education(user_id, payload)


@router.delete("/education/{edu_id}", response_model=ProfileResponse, responses=_needs_profile)
async def remove_education(
    edu_id: str,
    user_id: ObjectId = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    return await service.remove_education(user_id, edu_id)


@router.get(
    "/github/{username}",
    responses={404: {"description": "No GitHub profile found", "model": ErrorResponse}},
    summary="List a GitHub user's repositories",
    description="Proxies the GitHub API and returns its JSON unchanged.",
)
async def get_github_repositories(
    username: str,
    service: GitHubService = Depends(get_github_service),
) -> Any:
    return await service.list_repositories(username)
