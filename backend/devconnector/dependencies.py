"""
FastAPI dependencies returning the services built by `create_app()`.
"""

from starlette.requests import Request

from devconnector.services.auth_service import AuthService
from devconnector.services.github_service import GitHubService
from devconnector.services.post_service import PostService
from devconnector.services.profile_service import ProfileService
from devconnector.services.user_service import UserService


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_profile_service(request: Request) -> ProfileService:
    return request.app.state.profile_service


def get_github_service(request: Request) -> GitHubService:
    return request.app.state.github_service


def get_post_service(request: Request) -> PostService:
    return request.app.state.post_service
