"""
DevConnector Backend — User & Auth Schemas
============================================

What:  Request bodies for registration and login, and the public view of
       a user record.

Request fields default to empty strings and are validated even when
omitted, so a missing field produces the same field message as a blank
one ("Name is required") instead of a generic "Field required".
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from devconnector.schemas.common import DocumentResponse, normalize_email, require_text

MIN_PASSWORD_LENGTH = 6


class RegisterRequest(BaseModel):
    name: str = Field(default="", validate_default=True)
    email: str = Field(default="", validate_default=True)
    password: str = Field(default="", validate_default=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_text(v, "Name is required")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password should have at least {MIN_PASSWORD_LENGTH} characters"
            )
        return v


class LoginRequest(BaseModel):
    email: str = Field(default="", validate_default=True)
    password: str = Field(default="", validate_default=True)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


class UserResponse(DocumentResponse):
    """A user record as returned by GET /api/auth. Has no password field."""

    name: str
    email: str
    avatar: Optional[str] = None
    date: Optional[datetime] = None
