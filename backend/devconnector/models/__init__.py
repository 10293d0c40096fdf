"""
DevConnector Backend — Stored Document Models
===============================================

What:  Pydantic models describing the documents written to MongoDB.
How:   Each model owns its `_id` (generated client-side) and dumps itself
       into a BSON-ready dict with `to_mongo()`.

Documents are only built through these models on insert. Reads and
partial updates work on plain dicts from motor and are shaped for the
client by the response schemas in `devconnector.schemas`.
"""

from devconnector.models.base import MongoModel
from devconnector.models.post import CommentEntry, LikeEntry, PostDocument
from devconnector.models.profile import EducationEntry, ExperienceEntry, ProfileDocument
from devconnector.models.user import UserDocument

__all__ = [
    "MongoModel",
    "UserDocument",
    "ProfileDocument",
    "ExperienceEntry",
    "EducationEntry",
    "PostDocument",
    "LikeEntry",
    "CommentEntry",
]
