"""
DevConnector Backend — Custom Exception Hierarchy
===================================================

What:  Application-specific exceptions for every failure a handler can report.
How:   Each exception class carries a message, a machine-readable error code,
       the HTTP status it maps to, and an optional context dict. Global
       exception handlers (registered in main.py) turn them into the JSON
       error envelope.
Who:   Raised by services and the auth dependency; caught by global handlers.

Exception Hierarchy:
    DevConnectorError (base)                 → 500
    ├── ValidationError                      → 400 validation_error
    ├── UnauthorizedError                    → 401 unauthorized
    ├── InvalidCredentialsError              → 400 invalid_credentials
    ├── UserExistsError                      → 400 user_exists
    ├── NoProfileError                       → 400 no_profile
    ├── NotFoundError                        → 404 not_found
    │   └── UpstreamError                    → 404 not_found
    ├── ForbiddenError                       → 401 not_authorized
    ├── AlreadyLikedError                    → 400 already_liked
    ├── NotLikedYetError                     → 400 not_liked_yet
    └── ProfileRequiredError                 → 500 server_error

A few codes keep legacy statuses the existing web client depends on:
ownership violations answer 401 rather than 403, and a missing profile
answers 400 rather than 404.
"""

from typing import Any, Dict, List, Optional


class DevConnectorError(Exception):
    """
    Base exception for all DevConnector application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where a handler opts in)
    """

    status_code: int = 500
    error_code: str = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(DevConnectorError):
    """
    Raised when client input fails field validation.

    HTTP: 400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Name is required",
            "details": {"errors": [{"field": "name", "msg": "Name is required"}]}
        }
    """

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if errors is None:
            errors = [{"field": field, "msg": message}] if field else []
        ctx["errors"] = errors
        super().__init__(message=message, context=ctx)
        self.field = field
        self.errors = errors


class UnauthorizedError(DevConnectorError):
    """Missing, malformed or expired session token. HTTP 401."""

    status_code = 401
    error_code = "unauthorized"

    def __init__(self, message: str = "Token is not valid", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class InvalidCredentialsError(DevConnectorError):
    """
    Login failed.

    Raised for both an unknown email and a wrong password, with the same
    message, so the response does not reveal which accounts exist.
    """

    status_code = 400
    error_code = "invalid_credentials"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Invalid credentials", context=context)


class UserExistsError(DevConnectorError):
    """Registration with an email that is already taken. HTTP 400."""

    status_code = 400
    error_code = "user_exists"

    def __init__(self, email: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        if email:
            ctx["email"] = email
        super().__init__(message="User already exists", context=ctx)


class NoProfileError(DevConnectorError):
    """The requested user has no profile. HTTP 400 (legacy status)."""

    status_code = 400
    error_code = "no_profile"

    def __init__(
        self,
        message: str = "No profile found for this user",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(DevConnectorError):
    """
    Raised when a requested resource does not exist.

    Malformed ids are reported the same way as unknown ids.
    HTTP: 404 Not Found
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class UpstreamError(NotFoundError):
    """
    The GitHub API answered with a non-200 status.

    Reported to the client as a missing GitHub profile.
    """

    def __init__(self, upstream_status: int, username: str):
        super().__init__(
            resource="github profile",
            resource_id=username,
            message="No Github profile found",
            context={"upstream_status": upstream_status},
        )
        self.upstream_status = upstream_status


class ForbiddenError(DevConnectorError):
    """
    The caller does not own the post or comment they tried to delete.

    HTTP: 401 (legacy status, kept for client compatibility)
    """

    status_code = 401
    error_code = "not_authorized"

    def __init__(self, message: str = "User not authorized", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class AlreadyLikedError(DevConnectorError):
    status_code = 400
    error_code = "already_liked"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Post already liked", context=context)


class NotLikedYetError(DevConnectorError):
    status_code = 400
    error_code = "not_liked_yet"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Post has not yet been liked", context=context)


class ProfileRequiredError(DevConnectorError):
    """
    A profile sub-resource was edited before the profile itself exists.

    Profiles are never created implicitly here; the client has to POST
    /api/profile first. Answered as a plain server error.
    """

    status_code = 500
    error_code = "server_error"

    def __init__(self, user_id: Optional[str] = None):
        ctx = {"user_id": user_id} if user_id else {}
        super().__init__(message="Server error", context=ctx)
