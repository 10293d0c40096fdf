"""
DevConnector Backend — Password Hashing & Session Tokens
==========================================================

What:  bcrypt password hashing and signed session tokens (JWT, HS256).
How:   `hash_password` / `verify_password` wrap the bcrypt library;
       `TokenService` signs and verifies tokens with the configured secret.
Who:   UserService and AuthService issue tokens; the auth dependency in
       `middleware/auth.py` verifies them on every protected request.

Token payload:
    {"user": {"id": "<user ObjectId hex>"}, "iat": <issued>, "exp": <expiry>}

    The nested `user.id` shape is what the web client already decodes.
    Expiry defaults to 10 hours (JWT_EXPIRY_SECONDS).
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Union

import bcrypt
import jwt
from bson import ObjectId

from devconnector.config import Settings
from devconnector.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


# bcrypt only reads the first 72 bytes; bcrypt>=5 raises instead of truncating
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password with a fresh bcrypt salt at the given cost factor."""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class TokenService:
    """
    Issues and verifies session tokens.

    Signing is CPU-only, so both operations are plain synchronous calls.

    Args:
        settings: Provides jwt_secret, jwt_algorithm and jwt_expiry_seconds
    """

    def __init__(self, settings: Settings):
        self._secret = settings.jwt_secret
        self._algorithm = settings.jwt_algorithm
        self._expiry = timedelta(seconds=settings.jwt_expiry_seconds)

    def issue(self, user_id: Union[ObjectId, str]) -> str:
        """Returns a signed token for `user_id`."""
        now = datetime.now(timezone.utc)
        payload = {
            "user": {"id": str(user_id)},
            "iat": now,
            "exp": now + self._expiry,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> ObjectId:
        """
        Verifies signature and expiry and returns the caller's user id.

        Raises:
            UnauthorizedError: bad signature, expired token, malformed
                payload, or a user id that is not an ObjectId
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired token")
            raise UnauthorizedError("Token is not valid", context={"reason": "expired"})
        except jwt.InvalidTokenError as e:
            logger.info("Rejected invalid token: %s", e)
            raise UnauthorizedError("Token is not valid", context={"reason": "invalid"})

        user = payload.get("user")
        user_id = user.get("id") if isinstance(user, dict) else None
        if not isinstance(user_id, str) or not ObjectId.is_valid(user_id):
            raise UnauthorizedError("Token is not valid", context={"reason": "payload"})
        return ObjectId(user_id)
