"""
DevConnector Backend — MongoDB Connection Management
======================================================

What:  Async MongoDB client, collection accessors, index bootstrap and
       the FastAPI dependency that hands the database to route handlers.
How:   Wraps a motor `AsyncIOMotorClient`. The client connects lazily on
       the first operation, so building a `Database` never blocks.
Who:   Created by the application factory and stored on `app.state`;
       services receive it at construction.
When:  One instance per application; indexes are ensured at startup and
       the client is closed at shutdown.

Collections:
    users     → account records (unique email)
    profiles  → one document per user (unique `user` reference)
    posts     → posts with embedded likes and comments
"""

import logging
from typing import Any, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from starlette.requests import Request

from devconnector.config import Settings

logger = logging.getLogger(__name__)


class Database:
    """
    Thin holder around the motor client and the application database.

    Args:
        settings: Application settings (connection string and db name)
        client:   Optional pre-built client. Tests pass an in-memory
                  motor-compatible client here.
    """

    def __init__(self, settings: Settings, client: Optional[Any] = None):
        self.settings = settings
        self.client = client if client is not None else AsyncIOMotorClient(
            settings.mongo_uri,
            tz_aware=True,
        )
        self.db: AsyncIOMotorDatabase = self.client[settings.mongo_db_name]

    @property
    def users(self):
        return self.db["users"]

    @property
    def profiles(self):
        return self.db["profiles"]

    @property
    def posts(self):
        return self.db["posts"]

    async def ensure_indexes(self) -> None:
        """
        Creates the indexes the handlers rely on.

        The unique email index backs the duplicate-registration check when
        two signups race; the unique profile owner index keeps profiles
        one-to-one with users.
        """
        await self.users.create_index([("email", ASCENDING)], unique=True)
        await self.profiles.create_index([("user", ASCENDING)], unique=True)
        await self.posts.create_index([("date", DESCENDING)])
        logger.info("MongoDB indexes ensured on database '%s'", self.settings.mongo_db_name)

    async def ping(self) -> bool:
        """Round-trips a ping command; used by the health check."""
        await self.client.admin.command("ping")
        return True

    def close(self) -> None:
        # motor's close() is synchronous
        self.client.close()


def parse_object_id(value: Any) -> Optional[ObjectId]:
    """
    Converts a path parameter into an ObjectId.

    Returns None for anything that is not a valid 24-char hex id, so
    callers can report malformed ids exactly like unknown ones.
    """
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the application's `Database`."""
    return request.app.state.database
