"""
DevConnector Backend — Profile Schemas
========================================

What:  Request bodies for the profile endpoints and the joined profile
       returned to clients.

Profile request fields arrive the way the web client's form sends them:
flat strings, skills as one comma-separated string, social links as
top-level keys. `ProfileService` turns them into the stored shape.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from devconnector.schemas.common import DocumentResponse, require_text

SOCIAL_NETWORKS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


class ProfileRequest(BaseModel):
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[str] = Field(default=None, validate_default=True)
    githubusername: Optional[str] = None
    skills: Optional[str] = Field(default=None, validate_default=True)

    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: Optional[str]) -> str:
        return require_text(v, "Status is required")

    @field_validator("skills")
    @classmethod
    def validate_skills(cls, v: Optional[str]) -> str:
        return require_text(v, "Skills is required")

    def skill_list(self) -> List[str]:
        """Splits the comma-separated skills, trimming and dropping blanks."""
        return [skill.strip() for skill in (self.skills or "").split(",") if skill.strip()]


class _EntryRequest(BaseModel):
    from_: Optional[datetime] = Field(default=None, alias="from", validate_default=True)
    to: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("from_")
    @classmethod
    def validate_from(cls, v: Optional[datetime]) -> datetime:
        if v is None:
            raise ValueError("From date is required")
        return v


class ExperienceRequest(_EntryRequest):
    title: Optional[str] = Field(default=None, validate_default=True)
    company: Optional[str] = Field(default=None, validate_default=True)
    location: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> str:
        return require_text(v, "Title is required")

    @field_validator("company")
    @classmethod
    def validate_company(cls, v: Optional[str]) -> str:
        return require_text(v, "Company is required")

    @field_validator("location")
    @classmethod
    def validate_location(cls, v: Optional[str]) -> str:
        return require_text(v, "Location is required")


class EducationRequest(_EntryRequest):
    school: Optional[str] = Field(default=None, validate_default=True)
    degree: Optional[str] = Field(default=None, validate_default=True)
    fieldofstudy: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("school")
    @classmethod
    def validate_school(cls, v: Optional[str]) -> str:
        return require_text(v, "School is required")

    @field_validator("degree")
    @classmethod
    def validate_degree(cls, v: Optional[str]) -> str:
        return require_text(v, "Degree is required")

    @field_validator("fieldofstudy")
    @classmethod
    def validate_fieldofstudy(cls, v: Optional[str]) -> str:
        return require_text(v, "Field of study is required")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ProfileOwner(DocumentResponse):
    """The `user` of a profile, joined from the users collection."""

    name: str
    avatar: Optional[str] = None


class SocialLinks(BaseModel):
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None


class ExperienceResponse(DocumentResponse):
    title: str
    company: str
    location: Optional[str] = None
    from_: datetime = Field(alias="from")
    to: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None


class EducationResponse(DocumentResponse):
    school: str
    degree: str
    fieldofstudy: str
    from_: datetime = Field(alias="from")
    to: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None


class ProfileResponse(DocumentResponse):
    """
    A profile with its owner joined in.

    `user` is None when the owning account no longer exists.
    """

    user: Optional[ProfileOwner] = None
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: str
    githubusername: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    social: SocialLinks = Field(default_factory=SocialLinks)
    experience: List[ExperienceResponse] = Field(default_factory=list)
    education: List[EducationResponse] = Field(default_factory=list)
    date: Optional[datetime] = None

