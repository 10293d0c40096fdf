import logging

from bson import ObjectId

from devconnector.database import Database
from devconnector.exceptions import InvalidCredentialsError, NotFoundError
from devconnector.schemas.common import TokenResponse
from devconnector.schemas.user import LoginRequest, UserResponse
from devconnector.security import TokenService, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """Login and "who am I" lookups for the /api/auth routes."""

    def __init__(self, database: Database, tokens: TokenService):
        self.database = database
        self.tokens = tokens

    async def get_current_user(self, user_id: ObjectId) -> UserResponse:
        user = await self.database.users.find_one({"_id": user_id}, {"password": 0})
        if user is None:
            raise NotFoundError(resource="user", resource_id=str(user_id))
        return UserResponse.model_validate(user)

    async def login(self, payload: LoginRequest) -> TokenResponse:
        """
        Checks email and password and issues a token.

        Unknown email and wrong password raise the same error.
        """
        user = await self.database.users.find_one({"email": payload.email})
        if user is None or not verify_password(payload.password, user["password"]):
            logger.info("Failed login attempt for %s", payload.email)
            raise InvalidCredentialsError()

        return TokenResponse(token=self.tokens.issue(user["_id"]))
