"""
DevConnector Backend — Post Route Handlers
============================================

What:  The /api/posts endpoints. All of them require a logged-in user.

Route Inventory:
    POST   /api/posts                              create
    GET    /api/posts                              list, newest first
    GET    /api/posts/{id}                         detail
    DELETE /api/posts/{id}                         delete own post
    PUT    /api/posts/like/{id}                    like
    PUT    /api/posts/unlike/{id}                  unlike
    POST   /api/posts/comment/{id}                 add comment
    DELETE /api/posts/comment/{id}/{comment_id}    delete own comment
"""

from typing import List

from bson import ObjectId
from fastapi import APIRouter, Depends

from devconnector.dependencies import get_post_service
from devconnector.middleware.auth import get_current_user_id
from devconnector.schemas.common import ErrorResponse, MessageResponse
from devconnector.schemas.post import CommentResponse, LikeResponse, PostResponse, TextRequest
from devconnector.services.post_service import PostService

router = APIRouter(prefix="/api/posts", tags=["Posts"])

_not_found = {404: {"description": "Post not found", "model": ErrorResponse}}
_owner_only = {
    401: {"description": "Caller is not the author", "model": ErrorResponse},
    404: {"description": "Post or comment not found", "model": ErrorResponse},
}


@router.post("", response_model=PostResponse)
async def create_post(
    payload: TextRequest,
    user_id: ObjectId = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    return await service.create_post(user_id, payload)


@router.get("", response_model=List[PostResponse])
async def list_posts(
    user_id: ObjectId = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service),
) -> List[PostResponse]:
    return await service.list_posts()


@router.get("/{post_id}", response_model=PostResponse, responses=_not_found)
async def get_post(
    post_id: str,
    user_id: ObjectId = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    return await service.get_post(post_id)


@router.delete("/{post_id}", response_model=MessageResponse, responses=_owner_only)
async def delete_post(
    post_id: str,
    user_id: ObjectId = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service),
) -> MessageResponse:
    return await service.delete_post(user_id, post_id)


@router.put("/like/{post_id}", response_model=List[LikeResponse], responses=_not_found)
async def like_post(
    post_id: str,
    user_id: ObjectId = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service),
) -> List[LikeResponse]:
    return await service.like_post(user_id, post_id)


@router.put("/unlike/{post_id}", response_model=List[LikeResponse], responses=_not_found)
async def unlike_post(
    post_id: str,
    user_id: ObjectId = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service),
) -> List[LikeResponse]:
    return await service.unlike_post(user_id, post_id)


@router.post("/comment/{post_id}", response_model=List[CommentResponse], responses=_not_found)
async def add_comment(
    post_id: str,
    payload: TextRequest,
    user_id: ObjectId = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service),
) -> List[CommentResponse]:
    return await service.add_comment(user_id, post_id, payload)


@router.delete(
    "/comment/{post_id}/{comment_id}",
    response_model=List[CommentResponse],
    responses=_owner_only,
)
async def remove_comment(
    post_id: str,
    comment_id: str,
    user_id: ObjectId = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service),
) -> List[CommentResponse]:
    return await service.remove_comment(user_id, post_id, comment_id)
