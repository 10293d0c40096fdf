from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from devconnector.schemas.common import DocumentResponse, ObjectIdStr, require_text


class TextRequest(BaseModel):
    """Body of POST /api/posts and POST /api/posts/comment/{id}."""

    text: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: Optional[str]) -> str:
        return require_text(v, "Text is required")


class LikeResponse(DocumentResponse):
    user: ObjectIdStr


class CommentResponse(DocumentResponse):
    user: ObjectIdStr
    text: str
    name: str
    avatar: Optional[str] = None
    date: Optional[datetime] = None


class PostResponse(DocumentResponse):
    user: ObjectIdStr
    text: str
    name: str
    avatar: Optional[str] = None
    likes: List[LikeResponse] = Field(default_factory=list)
    comments: List[CommentResponse] = Field(default_factory=list)
    date: Optional[datetime] = None
