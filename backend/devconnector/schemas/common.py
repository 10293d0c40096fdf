"""
DevConnector Backend — Shared Schema Helpers
==============================================

What:  Types and small response models used by every resource's schemas.
How:   `ObjectIdStr` turns BSON ObjectIds into hex strings while a response
       model is validated, so services can feed raw motor documents
       straight into response schemas.
"""

from typing import Annotated, Any, Dict, Optional

from bson import ObjectId
from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _object_id_to_str(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    return value


ObjectIdStr = Annotated[str, BeforeValidator(_object_id_to_str)]


class DocumentResponse(BaseModel):
    """Base for responses that expose a Mongo `_id`."""

    id: ObjectIdStr = Field(alias="_id", description="Document id (24-char hex)")

    model_config = ConfigDict(populate_by_name=True)


def require_text(value: Optional[str], message: str) -> str:
    """Strips a string field and raises `message` if nothing is left."""
    if value is None or not value.strip():
        raise ValueError(message)
    return value.strip()


def normalize_email(value: Optional[str]) -> str:
    """
    Validates an email address and returns it trimmed and lowercased.

    Deliverability (DNS) is not checked. The whole address is lowercased,
    local part included, so one mailbox maps to one account and one
    Gravatar; registration and login both pass through here.
    """
    try:
        return validate_email((value or "").strip(), check_deliverability=False).normalized.lower()
    except EmailNotValidError:
        raise ValueError("Enter a valid email")


class TokenResponse(BaseModel):
    token: str = Field(description="Signed session token, valid for 10 hours")


class MessageResponse(BaseModel):
    msg: str


class ErrorResponse(BaseModel):
    """
    Error envelope returned by every failing endpoint.

    Example:
        {
            "error": "already_liked",
            "message": "Post already liked",
            "request_id": "3f9a1c2e"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Field-level errors")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="MongoDB connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
