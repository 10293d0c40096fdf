from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pydantic import Field

from devconnector.models.base import MongoModel, utcnow


class LikeEntry(MongoModel):
    user: ObjectId


class CommentEntry(MongoModel):
    """A comment embedded in a post; name/avatar are copied at write time."""

    user: ObjectId
    text: str
    name: str
    avatar: Optional[str] = None
    date: datetime = Field(default_factory=utcnow)


class PostDocument(MongoModel):
    """
    A post in the `posts` collection.

    `name` and `avatar` are copies of the author's user record taken when
    the post is created. They are not updated if the user changes later.
    """

    user: ObjectId
    text: str
    name: str
    avatar: Optional[str] = None
    likes: List[Dict[str, Any]] = Field(default_factory=list)
    comments: List[Dict[str, Any]] = Field(default_factory=list)
    date: datetime = Field(default_factory=utcnow)
