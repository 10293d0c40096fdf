"""
DevConnector Backend — User Registration Service
==================================================

What:  Creates accounts and hands back a session token.
How:   Checks the email is free, derives a Gravatar avatar, hashes the
       password with bcrypt and inserts the user document.
Who:   Called by POST /api/users.
"""

import hashlib
import logging
from urllib.parse import urlencode

from pymongo.errors import DuplicateKeyError

from devconnector.config import Settings
from devconnector.database import Database
from devconnector.exceptions import UserExistsError
from devconnector.models import UserDocument
from devconnector.schemas.common import TokenResponse
from devconnector.schemas.user import RegisterRequest
from devconnector.security import TokenService, hash_password

logger = logging.getLogger(__name__)

GRAVATAR_BASE_URL = "//www.gravatar.com/avatar/"
# 200px, PG rated, "mystery man" fallback
GRAVATAR_OPTIONS = {"s": "200", "r": "pg", "d": "mm"}


def gravatar_url(email: str) -> str:
    """Deterministic Gravatar URL for an email address."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"{GRAVATAR_BASE_URL}{digest}?{urlencode(GRAVATAR_OPTIONS)}"


class UserService:
    def __init__(self, settings: Settings, database: Database, tokens: TokenService):
        self.settings = settings
        self.database = database
        self.tokens = tokens

    async def register(self, payload: RegisterRequest) -> TokenResponse:
        """
        Registers a new user.

        Raises:
            UserExistsError: the email is already registered, either found
                up front or rejected by the unique index on insert
        """
        users = self.database.users
        if await users.find_one({"email": payload.email}) is not None:
            raise UserExistsError(email=payload.email)

        user = UserDocument(
            name=payload.name,
            email=payload.email,
            avatar=gravatar_url(payload.email),
            password=hash_password(payload.password, rounds=self.settings.bcrypt_rounds),
        )
        try:
            await users.insert_one(user.to_mongo())
        except DuplicateKeyError:
            raise UserExistsError(email=payload.email)

        logger.info("Registered user %s", user.id)
        return TokenResponse(token=self.tokens.issue(user.id))
