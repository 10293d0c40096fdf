"""
DevConnector Backend — Post Service
=====================================

What:  Posts, likes and comments.
How:   Posts embed their likes and comments. Author name and avatar are
       copied from the user record when a post or comment is written.
Who:   Called by the /api/posts route handlers.

Consistency:
    Like/unlike are single atomic updates guarded on `likes.user`, so two
    requests from the same user cannot both add a like. Comment edits
    rewrite the comment list from the loaded post.
"""

import logging
from typing import Any, Dict, List

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument

from devconnector.database import Database, parse_object_id
from devconnector.exceptions import (
    AlreadyLikedError,
    ForbiddenError,
    NotFoundError,
    NotLikedYetError,
)
from devconnector.models import CommentEntry, LikeEntry, PostDocument
from devconnector.schemas.common import MessageResponse
from devconnector.schemas.post import CommentResponse, LikeResponse, PostResponse, TextRequest

logger = logging.getLogger(__name__)


class PostService:
    def __init__(self, database: Database):
        self.database = database

    async def _load_author(self, user_id: ObjectId) -> Dict[str, Any]:
        user = await self.database.users.find_one({"_id": user_id}, {"name": 1, "avatar": 1})
        if user is None:
            raise NotFoundError(resource="user", resource_id=str(user_id))
        return user

    async def _load_post(self, post_id: str) -> Dict[str, Any]:
        """Loads a post; malformed and unknown ids both raise NotFoundError."""
        oid = parse_object_id(post_id)
        post = None
        if oid is not None:
            post = await self.database.posts.find_one({"_id": oid})
        if post is None:
            raise NotFoundError(resource="post", resource_id=post_id)
        return post

    # ── Posts ─────────────────────────────────────────────────────────────

    async def create_post(self, user_id: ObjectId, payload: TextRequest) -> PostResponse:
        author = await self._load_author(user_id)
        post = PostDocument(
            user=user_id,
            text=payload.text,
            name=author["name"],
            avatar=author.get("avatar"),
        ).to_mongo()
        await self.database.posts.insert_one(post)
        logger.info("User %s created post %s", user_id, post["_id"])
        return PostResponse.model_validate(post)

    async def list_posts(self) -> List[PostResponse]:
        """All posts, newest first."""
        cursor = self.database.posts.find().sort([("date", DESCENDING), ("_id", DESCENDING)])
        return [PostResponse.model_validate(post) for post in await cursor.to_list(length=None)]

    async def get_post(self, post_id: str) -> PostResponse:
        return PostResponse.model_validate(await self._load_post(post_id))

    async def delete_post(self, user_id: ObjectId, post_id: str) -> MessageResponse:
        post = await self._load_post(post_id)
        if post["user"] != user_id:
            raise ForbiddenError(context={"post_id": post_id})

        await self.database.posts.delete_one({"_id": post["_id"]})
        logger.info("User %s removed post %s", user_id, post_id)
        return MessageResponse(msg="Post removed")

    # ── Likes ─────────────────────────────────────────────────────────────

    async def like_post(self, user_id: ObjectId, post_id: str) -> List[LikeResponse]:
        post = await self._load_post(post_id)
        if any(like["user"] == user_id for like in post.get("likes", [])):
            raise AlreadyLikedError(context={"post_id": post_id})

        updated = await self.database.posts.find_one_and_update(
            {"_id": post["_id"], "likes.user": {"$ne": user_id}},
            {"$push": {"likes": LikeEntry(user=user_id).to_mongo()}},
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            raise AlreadyLikedError(context={"post_id": post_id})
        return [LikeResponse.model_validate(like) for like in updated["likes"]]

    async def unlike_post(self, user_id: ObjectId, post_id: str) -> List[LikeResponse]:
        post = await self._load_post(post_id)
        if not any(like["user"] == user_id for like in post.get("likes", [])):
            raise NotLikedYetError(context={"post_id": post_id})

        updated = await self.database.posts.find_one_and_update(
            {"_id": post["_id"], "likes.user": user_id},
            {"$pull": {"likes": {"user": user_id}}},
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            raise NotLikedYetError(context={"post_id": post_id})
        return [LikeResponse.model_validate(like) for like in updated["likes"]]

    # ── Comments ──────────────────────────────────────────────────────────

    async def add_comment(
        self, user_id: ObjectId, post_id: str, payload: TextRequest
    ) -> List[CommentResponse]:
        post = await self._load_post(post_id)
        author = await self._load_author(user_id)
        comment = CommentEntry(
            user=user_id,
            text=payload.text,
            name=author["name"],
            avatar=author.get("avatar"),
        ).to_mongo()

        comments = [comment] + list(post.get("comments", []))
        await self.database.posts.update_one({"_id": post["_id"]}, {"$set": {"comments": comments}})
        return [CommentResponse.model_validate(c) for c in comments]

    async def remove_comment(
        self, user_id: ObjectId, post_id: str, comment_id: str
    ) -> List[CommentResponse]:
        post = await self._load_post(post_id)
        comments = list(post.get("comments", []))
        comment = next((c for c in comments if str(c["_id"]) == comment_id), None)
        if comment is None:
            raise NotFoundError(
                resource="comment", resource_id=comment_id, message="Comment does not exist"
            )
        if comment["user"] != user_id:
            raise ForbiddenError(context={"post_id": post_id, "comment_id": comment_id})

        comments.remove(comment)
        await self.database.posts.update_one({"_id": post["_id"]}, {"$set": {"comments": comments}})
        return [CommentResponse.model_validate(c) for c in comments]
