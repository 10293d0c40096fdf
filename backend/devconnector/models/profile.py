from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pydantic import Field

from devconnector.models.base import MongoModel, utcnow


class ExperienceEntry(MongoModel):
    title: str
    company: str
    location: Optional[str] = None
    from_: datetime = Field(alias="from")
    to: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None


class EducationEntry(MongoModel):
    school: str
    degree: str
    fieldofstudy: str
    from_: datetime = Field(alias="from")
    to: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None


class ProfileDocument(MongoModel):
    """
    A profile in the `profiles` collection, one per user.

    `experience` and `education` are kept newest first: new entries are
    prepended.
    """

    user: ObjectId
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: str
    githubusername: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    social: Dict[str, str] = Field(default_factory=dict)
    experience: List[Dict[str, Any]] = Field(default_factory=list)
    education: List[Dict[str, Any]] = Field(default_factory=list)
    date: datetime = Field(default_factory=utcnow)
